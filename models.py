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

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Resolution:
    width: int
    height: int

    @property
    def pixels(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class FrameSeries:
    """
    Encoded size of every successfully decoded frame, in decoder output order.

    width/height come from the first decoded frame and stay 0 when nothing
    could be decoded, in which case values is empty.
    """

    width: int = 0
    height: int = 0
    values: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def resolution(self) -> Resolution:
        return Resolution(self.width, self.height)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class ChartRequest:
    series: Tuple[float, ...]
    y_axis_label: str
    canvas_size: Resolution
    destination: str
