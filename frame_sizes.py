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

from dataclasses import dataclass
from logging import Logger
from typing import Dict, Iterable, Iterator, List, Optional, Union

import av
from tqdm import tqdm

import utils
from decode_backend import DecodeBackend
from models import FrameSeries


@dataclass
class FrameSample:
    size: float
    width: int
    height: int


@dataclass
class DecodeWarning:
    packet_index: int
    message: str


# packets waiting for their frame; no decoder holds back this many
MAX_PENDING_PACKETS = 64


def _take_packet_size(pending_sizes: Dict[int, int], pts) -> Optional[int]:
    """Size of the packet that carried the frame with `pts`."""
    if pts is not None and pts in pending_sizes:
        return pending_sizes.pop(pts)
    if pending_sizes:
        # decode order is insertion order
        oldest = next(iter(pending_sizes))
        return pending_sizes.pop(oldest)
    return None


def _drop_passed(pending_sizes: Dict[int, int], pts) -> None:
    """Forget packets presented before `pts`; their frames will never come out."""
    for key in [key for key in pending_sizes if key < pts]:
        del pending_sizes[key]


def iter_frame_sizes(
    packets: Iterable, stream_index: int, decoder
) -> Iterator[Union[FrameSample, DecodeWarning]]:
    """
    Feed the packets of one stream to `decoder` and report what came out.

    Yields a FrameSample for every frame the decoder completes, carrying the
    byte size of the compressed packet the frame was decoded from, and a
    DecodeWarning for every packet the decoder rejects. A rejected packet does
    not stop the iteration: the remaining packets are still decoded.

    Packets accepted without producing a frame yet (reordering, frame
    threading) yield nothing until the frame shows up. The demuxer's empty
    flush packets are passed through so those held-back frames are drained.

    Frames are matched to their packet through the timestamp the decoder
    copies from packet to frame. Packets without one (raw elementary
    streams) are stamped with their decode index before decoding.
    """
    pending_sizes: Dict[int, int] = {}
    timestamped = True
    decode_index = 0
    packet_index = 0

    for packet in packets:
        if packet.stream_index != stream_index:
            continue

        if packet.size:
            if packet.pts is None:
                timestamped = False
                packet.pts = decode_index
            decode_index += 1
            pending_sizes[packet.pts] = packet.size
            if len(pending_sizes) > MAX_PENDING_PACKETS:
                del pending_sizes[next(iter(pending_sizes))]

        try:
            frames = decoder.decode(packet)
        except av.error.FFmpegError as e:
            if packet.pts is not None:
                pending_sizes.pop(packet.pts, None)
            yield DecodeWarning(packet_index, str(e))
            packet_index += 1
            continue

        for frame in frames:
            matched = frame.pts is not None and frame.pts in pending_sizes
            size = _take_packet_size(pending_sizes, frame.pts)
            if size is None:
                yield DecodeWarning(
                    packet_index, "Decoded frame has no pending packet size"
                )
                continue
            if matched and timestamped:
                _drop_passed(pending_sizes, frame.pts)
            yield FrameSample(float(size), frame.width, frame.height)
        packet_index += 1


def extract_frame_sizes(
    backend: DecodeBackend,
    input_path: str,
    logger: Optional[Logger] = None,
    show_progress: bool = False,
) -> FrameSeries:
    """
    Measure the encoded size of every decodable frame of the best video stream.

    Args:
        backend: handle returned by decode_backend.init_backend
        input_path: media file to analyze, never modified
        logger: destination of per-packet warnings and the summary
        show_progress: display a tqdm bar over the demuxed packets

    Returns:
        FrameSeries holding the size in bytes of each frame; empty with 0x0
        dimensions when no frame could be decoded
    """
    logger = utils.get_logger(logger)
    width = 0
    height = 0
    values: List[float] = []
    failed_packets = 0

    with backend.open_container(input_path) as container:
        stream = backend.best_video_stream(container)
        decoder = backend.open_decoder(stream)
        logger.info(
            f"Decoding stream #{stream.index} ({decoder.name}) from {input_path}"
        )

        packets = container.demux()
        if show_progress:
            packets = tqdm(packets, desc="Decoding packets", unit="pkt")

        for result in iter_frame_sizes(packets, stream.index, decoder):
            if isinstance(result, DecodeWarning):
                # a broken packet only costs its own sample
                failed_packets += 1
                logger.warning(
                    f"Skipping packet {result.packet_index}: {result.message}"
                )
                continue
            if not values:
                width = result.width
                height = result.height
            values.append(result.size)

    logger.info(
        f"Decoded {len(values)} frames ({width}x{height}), "
        f"{failed_packets} packets failed to decode"
    )
    return FrameSeries(width=width, height=height, values=tuple(values))
