import argparse
import logging
import sys

from errors import NetworkError
from nor_data import generate_nor, nor
from trainer import TrainConfig, Trainer, build_network, make_generator

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    defaults = TrainConfig()
    p = argparse.ArgumentParser(description="Train a small sigmoid network on the NOR function")
    p.add_argument("--iterations", type=int, default=defaults.iterations, metavar="N",
                   help=f"number of training examples (default: {defaults.iterations})")
    p.add_argument("--hidden", type=int, default=defaults.layer_sizes[1], metavar="H",
                   help=f"neurons in the hidden layer (default: {defaults.layer_sizes[1]})")
    p.add_argument("--seed", type=int, default=defaults.seed, metavar="S",
                   help="random seed for weights and data (default: fresh entropy)")
    p.add_argument("--samples", type=int, default=20, metavar="N",
                   help="number of random pairs to evaluate after training (default: 20)")
    p.add_argument("--log-interval", type=int, default=defaults.log_interval, metavar="N",
                   help="how many examples to wait before logging training status")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--no-progress", action="store_true", help="hide the progress bar")
    p.add_argument("--interactive", action="store_true",
                   help="read one pair of bits from stdin and print the prediction")
    return p.parse_args(argv)


def ask(trainer):
    print("Try it yourself!")
    tokens = sys.stdin.readline().split()
    if len(tokens) != 2:
        raise ValueError("expected two integers, e.g. '0 1'")
    a, b = (int(token) for token in tokens)
    value = float(trainer.predict([a, b])[0])
    print(f"{a} NOR {b} = {value:f}")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = TrainConfig().with_(
        layer_sizes=(2, args.hidden, 1),
        iterations=args.iterations,
        seed=args.seed,
        log_interval=args.log_interval,
        progress=not args.no_progress,
    )
    try:
        network = build_network(config.layer_sizes, make_generator(config.seed))
        trainer = Trainer(network)
        inputs, labels = generate_nor(config.iterations, seed=config.seed)

        print("Training...")
        trainer.fit(inputs, labels, log_interval=config.log_interval, progress=config.progress)

        print("Results!")
        sample_seed = None if config.seed is None else config.seed + 1
        samples, _ = generate_nor(args.samples, seed=sample_seed)
        for a, b in samples.astype(int).tolist():
            value = float(trainer.predict([a, b])[0])
            logger.debug("%d NOR %d: expected %d, got %f", a, b, nor(a, b), value)
            print(f"{a} NOR {b} = {value:f}")

        if args.interactive:
            ask(trainer)
    except (NetworkError, ValueError) as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
