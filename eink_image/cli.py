"""Command line front end: ``eink-image -i photo.jpg -o photo.png``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from tqdm import tqdm

from . import __version__
from .config import ConversionSettings, configure_logging
from .errors import ConversionError
from .pipeline import convert_file

logger = logging.getLogger(__name__)

_DEFAULTS = ConversionSettings()

# Message shown while the stage *after* the completed one runs.
_NEXT_MESSAGE = {
    "decode": "Converting to grayscale...",
    "grayscale": "Applying gamma correction...",
    "gamma": "Enhancing contrast...",
    "contrast": "Dithering...",
    "dither": "Saving output...",
    "encode": "Done",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eink-image",
        description="Convert images for optimal e-ink display rendering",
    )
    parser.add_argument("-i", "--input", required=True, metavar="FILE", help="Input image file or http(s) URL")
    parser.add_argument("-o", "--output", required=True, metavar="FILE", help="Output image file")
    parser.add_argument(
        "-c",
        "--contrast",
        default=str(_DEFAULTS.contrast),
        metavar="LEVEL",
        help="Contrast enhancement level (0.0-2.0)",
    )
    parser.add_argument("--no-dither", action="store_true", help="Disable Floyd-Steinberg dithering")
    parser.add_argument(
        "--diffusion",
        default=str(_DEFAULTS.diffusion),
        metavar="AMOUNT",
        help="Error diffusion amount (0.0-1.0)",
    )
    parser.add_argument("-g", "--gamma", default=str(_DEFAULTS.gamma), metavar="GAMMA", help="Gamma correction value")
    parser.add_argument(
        "-t",
        "--threshold",
        default=str(_DEFAULTS.threshold),
        metavar="LEVEL",
        help="Dithering threshold (0-255)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging verbosity")
    parser.add_argument("-q", "--quiet", action="store_true", help="Hide the progress bar")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args: argparse.Namespace) -> ConversionSettings:
    # Values stay strings until here so bad input surfaces as a ConfigurationError.
    return ConversionSettings.from_mapping(
        {
            "contrast": args.contrast,
            "gamma": args.gamma,
            "threshold": args.threshold,
            "diffusion": args.diffusion,
            "dither": not args.no_dither,
        }
    )


def run(argv: Optional[List[str]] = None) -> int:
    try:
        args = build_parser().parse_args(argv)
        configure_logging(args.log_level)
        settings = settings_from_args(args)
    except ConversionError as exc:
        sys.stderr.write(f"Error [{exc.stage}]: {exc.message}\n")
        return exc.exit_code

    with tqdm(total=100, desc="Loading image...", unit="%", disable=args.quiet, file=sys.stderr) as bar:

        def on_stage(stage: str, percent: int) -> None:
            bar.update(percent - bar.n)
            bar.set_description(_NEXT_MESSAGE.get(stage, stage))

        try:
            convert_file(args.input, args.output, settings, progress=on_stage)
        except ConversionError as exc:
            bar.set_description("Processing failed")
            logger.debug("Conversion failed", exc_info=True)
            sys.stderr.write(f"Error [{exc.stage}]: {exc.message}\n")
            if exc.details.get("reason"):
                sys.stderr.write(f"  reason: {exc.details['reason']}\n")
            return exc.exit_code

    print(f"Output saved to: {args.output}")
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
