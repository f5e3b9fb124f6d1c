"""
Crop ./image.png to its black border and write output.png.

Progress and errors go to crop-image.log (append mode). Any failure ends the
process with exit status 1.
"""
from __future__ import annotations

import os
import sys
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..exceptions import BorderCropError
from ..pipeline.crop_to_border import crop_to_border

INPUT_PATH = Path("./image.png")
OUTPUT_PATH = Path("output.png")
LOG_PATH = Path("crop-image.log")

LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'

logger = logging.getLogger("border_crop")


def configure_logging(log_path: Path = LOG_PATH, level: str | None = None) -> logging.Handler:
    """
    Route all border_crop log records to *log_path*, appending.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {level!r}")

    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler


def detach_logging(handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    handler.close()


def main(
    input_path: Path = INPUT_PATH,
    output_path: Path = OUTPUT_PATH,
    log_path: Path = LOG_PATH,
) -> int:
    config_error = None
    try:
        try:
            handler = configure_logging(log_path)
        except ValueError as err:
            # Bad level: report it through an INFO handler.
            config_error = err
            handler = configure_logging(log_path, level="INFO")
    except OSError as err:
        print(f"Cannot open log file: {err}", file=sys.stderr)
        return 1

    try:
        if config_error is not None:
            print(f"Invalid LOG_LEVEL: {config_error}", file=sys.stderr)
            logger.error(f"Invalid LOG_LEVEL: {config_error}")
            return 1
        crop_to_border(input_path, output_path)
    except (BorderCropError, ValueError) as err:
        logger.error(f"{type(err).__name__}: {err}")
        return 1
    finally:
        detach_logging(handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())
