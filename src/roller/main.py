"""Application entry point."""

import argparse
import asyncio
import logging
import sys

from roller.conditions.models import DiceKind
from roller.config import get_config
from roller.errors import SimulationError
from roller.games.presets import Game, get_preset, presets
from roller.simulation.batches import make_rng
from roller.simulation.engine import simulate_async
from roller.simulation.geometric import rolls_until_success


def _parse_pin(text: str) -> tuple[int, int]:
    position, sep, face = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Expected POS=FACE, got {text!r}")
    try:
        return int(position), int(face)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected integers in {text!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roller",
        description="Estimate how often a preset dice condition holds.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Example:\n"
            '  roller --game yahtzee --preset "Full House" --count 5 --pin 0=3'
        ),
    )
    parser.add_argument(
        "--game",
        choices=[game.name.lower() for game in Game],
        default=Game.EXAMPLES.name.lower(),
    )
    parser.add_argument("--preset", help="Preset name; omit to list the game's presets")
    parser.add_argument(
        "--dice",
        choices=[kind.name for kind in DiceKind],
        default=DiceKind.D6.name,
    )
    parser.add_argument("--count", type=int, default=None, help="Dice per roll")
    parser.add_argument("--batch-size", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--pin",
        action="append",
        type=_parse_pin,
        default=[],
        metavar="POS=FACE",
        help="Freeze the die at position POS (0-based) to FACE; repeatable",
    )
    parser.add_argument(
        "--no-frozen",
        action="store_true",
        help="Drop pinned dice from the roll instead of keeping their faces",
    )
    return parser


async def run(args: argparse.Namespace) -> None:
    """
    Run sequence: resolve preset → simulate off the event loop → report.

    Raises:
        SystemExit: On unknown presets or rejected simulations
    """
    logger = logging.getLogger(__name__)
    game = Game[args.game.upper()]
    dice_kind = DiceKind[args.dice]

    if args.preset is None:
        for condition_set in presets()[game]:
            logger.info(f"{game.value}: {condition_set.display_name}")
        return

    try:
        condition_set = get_preset(game, args.preset, dice_kind)
        result = await simulate_async(
            condition_set.conditions,
            batch_size=args.batch_size,
            dice_kind=dice_kind,
            dice_count=args.count,
            pinned=dict(args.pin),
            include_frozen=False if args.no_frozen else None,
            rng=make_rng(args.seed),
        )
    except KeyError as e:
        logger.error(f"Unknown preset: {e}")
        raise SystemExit(1) from e
    except SimulationError as e:
        logger.error(f"Simulation failed: {e}")
        raise SystemExit(1) from e

    logger.info(
        f"{condition_set.display_name}: p={result.probability:.4f} "
        f"sum={result.safe_sum} avg={result.safe_average} "
        f"({result.successes}/{result.total} batches)"
    )
    distribution = rolls_until_success(result.probability)
    logger.info(f"Expected rolls until success: {distribution.expected_rolls:.2f}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point with logging configuration."""
    # Configure logging
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = build_parser().parse_args(argv)

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        sys.exit(0)
    except SystemExit:
        raise
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
