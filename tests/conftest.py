# Copyright(c) 2025 Meta Platforms, Inc. and affiliates.
#
# This source code is subject to the terms of the BSD 2 Clause License and
# the Alliance for Open Media Patent License 1.0. If the BSD 2 Clause License
# was not distributed with this source code in the LICENSE file, you can
# obtain it at https://www.aomedia.org/license/software-license. If the
# Alliance for Open Media Patent License 1.0 was not distributed with this
# source code in the PATENTS file, you can obtain it at
# https://www.aomedia.org/license/patent-license.

"""Shared pytest fixtures: a generated sample clip and fake decode objects."""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

CLIP_WIDTH = 320
CLIP_HEIGHT = 180
CLIP_FRAMES = 3
CLIP_FPS = 3


class FakePacket:
    def __init__(self, stream_index: int, size: int, pts: Optional[int]):
        self.stream_index = stream_index
        self.size = size
        self.pts = pts


class FakeFrame:
    def __init__(self, pts: Optional[int], width: int = 64, height: int = 48):
        self.pts = pts
        self.width = width
        self.height = height


class FakeDecoder:
    """
    Decoder stand-in driven by a table: packet pts -> frames to return, or
    an exception to raise. Packets missing from the table return no frame.
    """

    name = "fake"

    def __init__(self, outputs: Dict):
        self.outputs = outputs
        self.received: List[FakePacket] = []

    def decode(self, packet):
        self.received.append(packet)
        result = self.outputs.get(packet.pts, [])
        if isinstance(result, Exception):
            raise result
        return result


class DelayingDecoder:
    """
    Decoder stand-in returning each frame `delay` packets late, stamped with
    the pts of its packet (or None when `keep_pts` is off). An empty packet
    drains every held-back frame.
    """

    name = "delaying"

    def __init__(self, delay: int = 1, keep_pts: bool = True):
        self.delay = delay
        self.keep_pts = keep_pts
        self.held: List[Optional[int]] = []
        self.received: List[Optional[int]] = []

    def _frame(self, pts):
        return FakeFrame(pts if self.keep_pts else None)

    def decode(self, packet):
        self.received.append(packet.pts)
        if not packet.size:
            drained = [self._frame(pts) for pts in self.held]
            self.held = []
            return drained
        self.held.append(packet.pts)
        if len(self.held) <= self.delay:
            return []
        return [self._frame(self.held.pop(0))]


class FakeStream:
    def __init__(self, index: int):
        self.index = index


class FakeContainer:
    def __init__(self, packets: List[FakePacket]):
        self.packets = packets
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def demux(self):
        return iter(self.packets)


class FakeBackend:
    def __init__(self, container: FakeContainer, stream: FakeStream, decoder):
        self.container = container
        self.stream = stream
        self.decoder = decoder

    def open_container(self, path):
        return self.container

    def best_video_stream(self, container):
        return self.stream

    def open_decoder(self, stream):
        return self.decoder


def demuxed_packets(path: Path) -> List[Tuple[Optional[int], int]]:
    """(pts, size) of every non-empty video packet, in decode order."""
    import av

    with av.open(str(path)) as container:
        stream = container.streams.video[0]
        return [
            (packet.pts, packet.size)
            for packet in container.demux(stream)
            if packet.size
        ]


def make_clip(path: Path, frames: int = CLIP_FRAMES, options=None):
    """
    Encode a CLIP_WIDTHxCLIP_HEIGHT H.264 clip at CLIP_FPS with libx264 and
    return its packets as read back by the demuxer.
    """
    import av
    import numpy as np

    try:
        av.codec.Codec("libx264", "w")
    except ValueError:
        pytest.skip("libx264 encoder not available")

    with av.open(str(path), mode="w") as container:
        stream = container.add_stream("libx264", rate=CLIP_FPS)
        stream.width = CLIP_WIDTH
        stream.height = CLIP_HEIGHT
        stream.pix_fmt = "yuv420p"
        stream.options = options or {}

        for i in range(frames):
            image = np.zeros((CLIP_HEIGHT, CLIP_WIDTH, 3), dtype=np.uint8)
            image[:, :, 0] = (40 * i) % 256
            top = (i * 15) % (CLIP_HEIGHT - 40)
            image[top : top + 40, (i * 20) % CLIP_WIDTH :, 1] = 255
            frame = av.VideoFrame.from_ndarray(image, format="rgb24")
            frame = frame.reformat(format="yuv420p")
            for packet in stream.encode(frame):
                container.mux(packet)

        for packet in stream.encode():
            container.mux(packet)

    return demuxed_packets(path)


@pytest.fixture(scope="session")
def sample_clip(tmp_path_factory):
    """
    3 frames of baseline H.264 in MP4, shaped like the clip made by
      ffmpeg -r 3 -t 1 -f lavfi -i testsrc -vf scale=320:180
      -vcodec libx264 -profile:v baseline -pix_fmt yuv420p testsrc_3_frames.mp4
    Returns the path and the packet sizes in decode order.
    """
    path = tmp_path_factory.mktemp("media") / "testsrc_3_frames.mp4"
    packets = make_clip(path, options={"profile": "baseline"})
    return path, [size for _, size in packets]


BFRAME_OPTIONS = {"profile": "main", "bf": "2", "x264-params": "b-adapt=0"}
BFRAME_CLIP_FRAMES = 12


@pytest.fixture(scope="session")
def bframe_clip(tmp_path_factory):
    """12 frames of H.264 with two B-frames between references, in MP4."""
    path = tmp_path_factory.mktemp("media") / "bframes.mp4"
    return path, make_clip(path, BFRAME_CLIP_FRAMES, BFRAME_OPTIONS)


@pytest.fixture(scope="session")
def annexb_clip(tmp_path_factory):
    """Same content as bframe_clip as a raw Annex-B stream, without timestamps."""
    path = tmp_path_factory.mktemp("media") / "bframes.h264"
    return path, make_clip(path, BFRAME_CLIP_FRAMES, BFRAME_OPTIONS)
