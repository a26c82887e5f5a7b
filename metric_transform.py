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

from enum import Enum
from typing import List, Tuple

from errors import InvalidNormalizationError
from models import FrameSeries


class Metric(Enum):
    RAW = "raw"
    PER_PIXEL = "per_pixel"


class SizeUnit(Enum):
    BYTE = ("byte", 1)
    BIT = ("bit", 8)

    def __init__(self, label: str, factor: int):
        self.label = label
        self.factor = factor


def axis_label(metric: Metric, unit: SizeUnit) -> str:
    if metric is Metric.PER_PIXEL:
        return f"{unit.label} per pixel"
    return unit.label


def transform_series(
    series: FrameSeries, metric: Metric, unit: SizeUnit = SizeUnit.BYTE
) -> Tuple[List[float], str]:
    """
    Convert packet byte sizes to the requested metric.

    Returns the converted values and the matching y-axis label. Per-pixel
    values divide by the frame area captured during extraction.
    """
    if metric is Metric.PER_PIXEL:
        pixels = series.width * series.height
        if pixels == 0:
            raise InvalidNormalizationError(
                "Cannot normalize per pixel: no frame was decoded, resolution unknown"
            )
        values = [v * unit.factor / pixels for v in series.values]
    elif unit.factor == 1:
        values = list(series.values)
    else:
        values = [v * unit.factor for v in series.values]

    return values, axis_label(metric, unit)
