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

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

import utils
from errors import EmptySeriesError, RenderIoError
from models import ChartRequest

# fixed layout of the chart
Y_HEADROOM = 1.2
LEFT_LABEL_AREA = 0.10
BOTTOM_LABEL_AREA = 0.10
FONT_HEIGHT_RATIO = 0.03


@dataclass
class ChartStats:
    count: int
    maximum: float
    mean: float
    y_max: float


@dataclass
class ChartStyle:
    dpi: int = 100
    x_label: str = "Frame no"
    font_family: str = "sans-serif"
    series_color: str = "blue"
    series_alpha: float = 0.8
    mean_color: str = "red"
    mean_alpha: float = 0.3

    def __post_init__(self):
        if self.dpi < 1:
            raise ValueError(f"dpi must be positive: {self.dpi}")

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "ChartStyle":
        return cls(
            dpi=int(settings.get("dpi", cls.dpi)),
            x_label=str(settings.get("x_label", cls.x_label)),
            font_family=str(settings.get("font_family", cls.font_family)),
            series_color=str(settings.get("series_color", cls.series_color)),
            series_alpha=float(settings.get("series_alpha", cls.series_alpha)),
            mean_color=str(settings.get("mean_color", cls.mean_color)),
            mean_alpha=float(settings.get("mean_alpha", cls.mean_alpha)),
        )


def compute_chart_stats(values: Sequence[float]) -> ChartStats:
    if len(values) == 0:
        raise EmptySeriesError("Cannot chart an empty series")
    data = np.asarray(values, dtype=np.float64)
    maximum = float(data.max())
    mean = float(data.sum() / len(data))
    return ChartStats(
        count=len(data), maximum=maximum, mean=mean, y_max=maximum * Y_HEADROOM
    )


def render_chart(request: ChartRequest, style: Optional[ChartStyle] = None) -> ChartStats:
    """
    Draw the series and its mean as two lines and save the bitmap.

    Args:
        request: values, y-axis label, canvas size in pixels and destination
        style: colors, dpi and fonts; defaults to ChartStyle()

    Returns:
        Statistics the chart axes were derived from
    """
    style = style or ChartStyle()
    stats = compute_chart_stats(request.series)

    width = request.canvas_size.width
    height = request.canvas_size.height
    dpi = style.dpi
    # font sizes are in points, the canvas in pixels
    font_size = FONT_HEIGHT_RATIO * height * 72.0 / dpi

    x_max = stats.count - 1
    x_values = np.arange(stats.count)

    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    try:
        fig.patch.set_facecolor("white")
        ax = fig.add_axes(
            [
                LEFT_LABEL_AREA,
                BOTTOM_LABEL_AREA,
                1.0 - LEFT_LABEL_AREA,
                1.0 - BOTTOM_LABEL_AREA,
            ]
        )
        # matplotlib refuses empty intervals
        ax.set_xlim(0, x_max if x_max > 0 else 1)
        ax.set_ylim(0.0, stats.y_max if stats.y_max > 0 else 1.0)
        ax.grid(False)

        ax.set_xlabel(style.x_label, fontsize=font_size, family=style.font_family)
        ax.set_ylabel(request.y_axis_label, fontsize=font_size, family=style.font_family)
        ax.tick_params(axis="both", labelsize=font_size)
        for label in ax.get_xticklabels() + ax.get_yticklabels():
            label.set_family(style.font_family)

        ax.plot(
            x_values,
            np.asarray(request.series, dtype=np.float64),
            color=style.series_color,
            alpha=style.series_alpha,
        )
        # average size
        ax.plot(
            x_values,
            np.full(stats.count, stats.mean),
            color=style.mean_color,
            alpha=style.mean_alpha,
        )

        existed = os.path.exists(request.destination)
        try:
            fig.savefig(request.destination, dpi=dpi, facecolor="white")
        except (OSError, ValueError) as e:
            if not existed:
                utils.delete_file(request.destination)
            raise RenderIoError(
                f"Failed to write chart to {request.destination}: {e}"
            ) from e
    finally:
        plt.close(fig)

    return stats
