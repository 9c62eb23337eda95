"""
Find the JPEG quality whose DSSIM against the input lands inside a target band,
then write the image recompressed at that quality next to the input.

    python run.py jpegoptim /path/to/input-image.jpg
"""
import argparse
import logging
import os
import sys
import time

from dssim_optimizer import (
    ENCODERS,
    ConfigurationError,
    DssimEvaluator,
    EvaluationError,
    SearchConfig,
    StepHalvingSearch,
    TargetBand,
    ToolPaths,
    get_encoder,
)
from dssim_optimizer.history import save_history
from dssim_optimizer.utils import setup_logging

logger = logging.getLogger("dssim_optimizer.run")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNCONVERGED = 2


def build_parser():
    defaults = SearchConfig()
    parser = argparse.ArgumentParser(
        description="Pick a JPEG quality by targeting a DSSIM range instead of the encoder's quality scale."
    )
    parser.add_argument("encoder", help=f"JPEG compression method: {' | '.join(ENCODERS)}")
    parser.add_argument("input", help="Input JPEG")
    parser.add_argument("--quality", type=int, default=defaults.initial_quality, help="Initial quality")
    parser.add_argument("--step", type=int, default=defaults.initial_step, help="Initial summand/subtrahend")
    parser.add_argument("--lower", type=float, default=defaults.band.lower, help="DSSIM lower bound (inclusive)")
    parser.add_argument("--upper", type=float, default=defaults.band.upper, help="DSSIM upper bound (exclusive)")
    parser.add_argument("--max-iterations", dest="max_iterations", type=int, default=defaults.max_iterations)
    parser.add_argument(
        "--clamp", nargs=2, type=int, metavar=("LO", "HI"),
        help="Keep candidate qualities within [LO, HI] (unclamped by default)",
    )
    parser.add_argument("--suffix", default="_dssim", help="Output name suffix; empty overwrites the input")
    parser.add_argument("--timeout", type=float, default=120.0, help="Timeout per external tool call (s)")
    parser.add_argument("--history-csv", dest="history_csv", help="Append the iteration history to this CSV")
    parser.add_argument("--eval-log", dest="eval_log", help="Per-evaluation log file")
    parser.add_argument("--jpegoptim-path", default="jpegoptim")
    parser.add_argument("--mozjpeg-path", default="mozjpeg")
    parser.add_argument("--dssim-path", default="dssim")
    parser.add_argument("--convert-path", default="convert")
    parser.add_argument("--strict", action="store_true", help="Exit with status 2 if the search did not converge")
    parser.add_argument("--log-file", help="Log file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def output_path(input_path: str, suffix: str) -> str:
    """<dir>/<name><suffix>.<ext>; an empty suffix means overwrite."""
    base, ext = os.path.splitext(input_path)
    return f"{base}{suffix}{ext}"


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)
    start_time = time.time()

    tools = ToolPaths(
        jpegoptim=args.jpegoptim_path,
        mozjpeg=args.mozjpeg_path,
        dssim=args.dssim_path,
        convert=args.convert_path,
    )
    try:
        config = SearchConfig(
            initial_quality=args.quality,
            initial_step=args.step,
            band=TargetBand(args.lower, args.upper),
            max_iterations=args.max_iterations,
            encoder=args.encoder,
            quality_bounds=tuple(args.clamp) if args.clamp else None,
        )
        encoder = get_encoder(
            config.encoder, executable=getattr(tools, config.encoder, None), timeout=args.timeout
        )
        if not os.path.isfile(args.input):
            raise ConfigurationError(f"Input file not found: {args.input}")
    except ConfigurationError as e:
        logger.error("Error: %s", e)
        return EXIT_ERROR

    evaluator = DssimEvaluator(
        args.input, encoder, tools=tools, timeout=args.timeout, log_path=args.eval_log
    )
    try:
        result = StepHalvingSearch(evaluator, config).optimize()
        if args.history_csv:
            save_history(result, args.history_csv, encoder=encoder.name, append=True)
        # the chosen quality is encoded once more for the output artifact
        data = encoder.compress(args.input, result.quality)
    except EvaluationError as e:
        logger.error("Search aborted: %s", e)
        return EXIT_ERROR
    finally:
        evaluator.close()

    dest = output_path(args.input, args.suffix)
    with open(dest, "wb") as f:
        f.write(data)

    elapsed = time.time() - start_time
    print(f"Selected JPEG quality: {result.quality}")
    if not result.converged:
        logger.warning(
            "DSSIM did not converge within %d iterations; quality %d was not verified",
            config.max_iterations, result.quality,
        )
    logger.info("Wrote %s in %.1fs (%d evaluations)", dest, elapsed, result.iterations)

    if args.strict and not result.converged:
        return EXIT_UNCONVERGED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
