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

"""Errors raised while measuring frame sizes and rendering the chart."""


class FrameSizeError(Exception):
    """Base class for every fatal error of the frame size pipeline."""


class MediaOpenError(FrameSizeError):
    pass


class NoVideoStreamError(FrameSizeError):
    pass


class DecoderInitError(FrameSizeError):
    pass


class InvalidNormalizationError(FrameSizeError):
    pass


class EmptySeriesError(FrameSizeError):
    pass


class RenderIoError(FrameSizeError):
    pass
