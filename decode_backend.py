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

"""
Thin layer over PyAV: container opening, stream selection and decoder setup.

The media library is configured once per process by `init_backend`, which
returns the handle the extractor works with.
"""

import threading
from typing import Optional

import av

from errors import DecoderInitError, MediaOpenError, NoVideoStreamError

FFMPEG_LOG_LEVELS = (
    "quiet",
    "panic",
    "fatal",
    "error",
    "warning",
    "info",
    "verbose",
    "debug",
)

_init_lock = threading.Lock()
_backend: Optional["DecodeBackend"] = None


class DecodeBackend:
    def __init__(self, log_level: str):
        self.log_level = log_level

    def open_container(self, path: str):
        try:
            return av.open(str(path), mode="r")
        except (av.error.FFmpegError, OSError) as e:
            raise MediaOpenError(f"Failed to open {path}: {e}") from e

    def best_video_stream(self, container):
        stream = container.streams.best("video")
        if stream is None:
            raise NoVideoStreamError("Failed to find video stream")
        return stream

    def open_decoder(self, stream):
        codec_context = stream.codec_context
        if codec_context is None:
            raise DecoderInitError(
                f"No decoder available for stream #{stream.index}"
            )
        try:
            codec_context.open(strict=False)
        except (av.error.FFmpegError, ValueError) as e:
            raise DecoderInitError(
                f"Failed to open {codec_context.name} decoder: {e}"
            ) from e
        return codec_context


def init_backend(log_level: str = "error") -> DecodeBackend:
    """
    Configure FFmpeg logging once and return the shared backend handle.

    Later calls return the handle created by the first one, whatever
    `log_level` they pass.
    """
    global _backend

    with _init_lock:
        if _backend is None:
            if log_level not in FFMPEG_LOG_LEVELS:
                raise ValueError(
                    f"Unknown FFmpeg log level: {log_level}, expected one of {FFMPEG_LOG_LEVELS}"
                )
            av.logging.set_level(getattr(av.logging, log_level.upper()))
            _backend = DecodeBackend(log_level)
    return _backend
