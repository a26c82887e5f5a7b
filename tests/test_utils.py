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

import pytest

import utils
from models import Resolution


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1920:1080", Resolution(1920, 1080)),
        ("320:180", Resolution(320, 180)),
        (" 640:480 ", Resolution(640, 480)),
    ],
)
def test_parse_resolution(value, expected):
    assert utils.parse_resolution(value) == expected


@pytest.mark.parametrize("value", ["1920", "1920x1080", "0:1080", "1920:0", "-1:5", "a:b"])
def test_parse_resolution_invalid(value):
    with pytest.raises(argparse.ArgumentTypeError):
        utils.parse_resolution(value)


def test_create_logger_to_file(tmp_path):
    path = tmp_path / "logs" / "run.log"
    logger = utils.create_logger("test_file_logger", str(path))
    logger.info("hello")
    logger.debug("hidden")
    for handler in logger.handlers:
        handler.flush()

    text = path.read_text()
    assert "[INFO] hello" in text
    assert "hidden" not in text


def test_create_logger_replaces_handlers(tmp_path):
    utils.create_logger("test_twice", str(tmp_path / "a.log"))
    logger = utils.create_logger("test_twice", None, logging.DEBUG)
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_get_logger_default():
    assert utils.get_logger().name == utils.LOGGER_NAME
    custom = logging.getLogger("custom")
    assert utils.get_logger(custom) is custom


def test_delete_file(tmp_path):
    path = tmp_path / "x.txt"
    path.write_text("x")
    utils.delete_file(str(path))
    assert not path.exists()
    # already gone
    utils.delete_file(str(path))
