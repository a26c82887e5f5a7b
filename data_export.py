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

from typing import Sequence

import pandas as pd

from errors import RenderIoError
from models import FrameSeries


def series_to_dataframe(
    series: FrameSeries, values: Sequence[float], y_label: str
) -> pd.DataFrame:
    """One row per frame: raw packet size next to the charted value, named after y_label."""
    if len(values) != len(series.values):
        raise ValueError(
            f"Got {len(values)} charted values for {len(series.values)} frames"
        )
    df = pd.DataFrame(
        {
            "frame": range(len(series.values)),
            "size_bytes": list(series.values),
            y_label: list(values),
        }
    )
    return df


def write_series_csv(
    series: FrameSeries, values: Sequence[float], y_label: str, csv_path: str
) -> pd.DataFrame:
    df = series_to_dataframe(series, values, y_label)
    try:
        df.to_csv(csv_path, index=False)
    except OSError as e:
        raise RenderIoError(f"Failed to write CSV to {csv_path}: {e}") from e
    return df
