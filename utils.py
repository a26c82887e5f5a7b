#!/usr/bin/env python3
# Copyright(c) 2025 Meta Platforms, Inc. and affiliates.
#
# This source code is subject to the terms of the BSD 2 Clause License and
# the Alliance for Open Media Patent License 1.0. If the BSD 2 Clause License
# was not distributed with this source code in the LICENSE file, you can
# obtain it at https://www.aomedia.org/license/software-license. If the
# Alliance for Open Media Patent License 1.0 was not distributed with this
# source code in the PATENTS file, you can obtain it at
# https://www.aomedia.org/license/patent-license.

import argparse
import logging
import os
import re
from typing import Optional

from models import Resolution

LOGGER_NAME = "frame_size"

# "1920:1080" style canvas sizes
size_re = r"^(?P<width>\d+):(?P<height>\d+)$"


def create_logger(name, path=None, level=logging.INFO):
    """
    Create a logger writing to `path`, or to stderr when no path is given.

    Handlers from a previous call with the same name are dropped first, so
    calling this twice does not duplicate output.
    """
    logger = logging.getLogger(name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if path:
        log_dir = os.path.dirname(path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        log_handler = logging.FileHandler(path, "w")
    else:
        log_handler = logging.StreamHandler()
    log_handler.setLevel(level)
    log_handler.setFormatter(
        logging.Formatter("[%(asctime)s][%(levelname)s] %(message)s")
    )
    logger.addHandler(log_handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    return logger


def get_logger(logger: Optional[logging.Logger] = None) -> logging.Logger:
    return logger if logger is not None else logging.getLogger(LOGGER_NAME)


def parse_resolution(value: str) -> Resolution:
    """Parse a `width:height` string into a Resolution with positive sides."""
    match = re.match(size_re, value.strip())
    if not match:
        raise argparse.ArgumentTypeError(
            f"Invalid size '{value}', expected <width>:<height>"
        )
    width = int(match.group("width"))
    height = int(match.group("height"))
    if width < 1 or height < 1:
        raise argparse.ArgumentTypeError(
            f"Invalid size '{value}', width and height must be positive"
        )
    return Resolution(width, height)


def delete_file(path):
    if path and os.path.exists(path):
        os.remove(path)
