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
import copy
import os
from typing import Any, Dict, Optional

import yaml

import utils
from decode_backend import FFMPEG_LOG_LEVELS

DEFAULT_CONFIG: Dict[str, Any] = {
    "placeholders": {},
    "logging": {
        "level": "INFO",
        "log_path": "",
    },
    "decoder": {
        "ffmpeg_log_level": "error",
        "show_progress": True,
    },
    "chart": {
        "dpi": 100,
        "x_label": "Frame no",
        "font_family": "sans-serif",
        "series_color": "blue",
        "series_alpha": 0.8,
        "mean_color": "red",
        "mean_alpha": 0.3,
    },
    "output": {
        "size": "1920:1080",
        "unit": "byte",
    },
}

ALLOWED_UNITS = ("byte", "bit")
ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def update_values(values, placeholders):
    class Default(dict):
        def __missing__(self, key):
            return f"{{{key}}}"

    if isinstance(values, dict):
        for key, value in values.items():
            values[key] = update_values(value, placeholders)
    elif isinstance(values, list):
        values = [update_values(value, placeholders) for value in values]
    elif isinstance(values, str):
        values = os.path.expanduser(values.format_map(Default(placeholders)))
    return values


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Built-in defaults, optionally overridden by a YAML file."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        user_config: Dict[str, Any] = {}
        if config_path is not None:
            with open(config_path, "r") as file:
                user_config = yaml.safe_load(file) or {}
            if not isinstance(user_config, dict):
                raise ValueError(f"Config file {config_path} must contain a mapping")

        self.config = merge_config(DEFAULT_CONFIG, user_config)
        self.validate_config()

    def validate_config(self) -> None:
        required_sections = ["logging", "decoder", "chart", "output"]
        for section in required_sections:
            if not isinstance(self.config.get(section), dict):
                raise ValueError(f"Missing required config section: {section}")

        update_values(self.config, self.config.get("placeholders") or {})

        level = str(self.config["logging"]["level"]).upper()
        if level not in ALLOWED_LOG_LEVELS:
            raise ValueError(f"Unknown logging.level: {level}")
        self.config["logging"]["level"] = level

        try:
            utils.parse_resolution(str(self.config["output"]["size"]))
        except argparse.ArgumentTypeError as e:
            raise ValueError(f"Invalid output.size: {e}") from e

        ffmpeg_level = self.config["decoder"]["ffmpeg_log_level"]
        if ffmpeg_level not in FFMPEG_LOG_LEVELS:
            raise ValueError(
                f"Unknown decoder.ffmpeg_log_level: {ffmpeg_level}, expected one of {FFMPEG_LOG_LEVELS}"
            )

        unit = self.config["output"]["unit"]
        if unit not in ALLOWED_UNITS:
            raise ValueError(
                f"Unknown output.unit: {unit}, expected one of {ALLOWED_UNITS}"
            )

        chart = self.config["chart"]
        if int(chart["dpi"]) < 1:
            raise ValueError(f"chart.dpi must be positive: {chart['dpi']}")
        for key in ("series_alpha", "mean_alpha"):
            if not 0.0 <= float(chart[key]) <= 1.0:
                raise ValueError(f"chart.{key} must be within [0, 1]: {chart[key]}")

    def get_logging_settings(self) -> Dict[str, Any]:
        return self.config["logging"]

    def get_decoder_settings(self) -> Dict[str, Any]:
        return self.config["decoder"]

    def get_chart_settings(self) -> Dict[str, Any]:
        return self.config["chart"]

    def get_output_settings(self) -> Dict[str, Any]:
        return self.config["output"]
