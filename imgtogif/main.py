"""Точка входа: конвертация изображения в GIF из командной строки."""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from imgtogif.app import ImgToGifApp
from imgtogif.log import set_loglevel, setup_custom_logger
from imgtogif.models.message_model import CommandArgs
from imgtogif.models.options_model import RESAMPLE_FILTERS, ConversionOptions
from imgtogif.services.upload_service import DirectoryUploader, LoggingNotifier

CLI_CHANNEL = "cli"


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def palette_index(value: str) -> int:
    index = int(value)
    if not 0 <= index <= 255:
        raise argparse.ArgumentTypeError(f"must be in 0..255, got {value}")
    return index


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgtogif",
        description="Convert an image (file path or URL) to a single-frame GIF89a",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('source', help='Image URL or local file path')
    parser.add_argument('-W', '--width', type=positive_int, default=None, help='Width of output GIF')
    parser.add_argument('-H', '--height', type=positive_int, default=None, help='Height of output GIF')
    parser.add_argument('-o', '--output-dir', default='.', help='Directory to write the GIF into')
    parser.add_argument('--resample', choices=RESAMPLE_FILTERS, default='bilinear', help='Resampling filter')
    parser.add_argument('--transparent-index', type=palette_index, default=None,
                        help='Palette index to mark as transparent')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    group.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Разбирает аргументы, собирает приложение и выполняет одну конвертацию."""
    args = build_parser().parse_args(argv)
    logger = setup_custom_logger('imgtogif')
    set_loglevel(logger, args)

    options = ConversionOptions(resample=args.resample, transparent_index=args.transparent_index)
    uploader = DirectoryUploader(args.output_dir)
    with ImgToGifApp(notifier=LoggingNotifier(logger), uploader=uploader, options=options) as app:
        result = app.run(CommandArgs(url=args.source, width=args.width, height=args.height), CLI_CHANNEL)
    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(main())
