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
Plot the encoded size of every frame of a video stream.

  # raw packet sizes of input.mp4 as a 1920x1080 chart
  python plot_frame_size.py -i input.mp4 -o frame_size.png

  # bits per pixel, custom canvas, plus the per-frame values as CSV
  python plot_frame_size.py -i input.mp4 -o bpp.png -s 1280:720 --bpp --bits --csv bpp.csv
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import yaml

import utils
from chart import ChartStyle, render_chart
from config_manager import ConfigManager
from data_export import write_series_csv
from decode_backend import init_backend
from errors import FrameSizeError, RenderIoError
from frame_sizes import extract_frame_sizes
from metric_transform import Metric, SizeUnit, transform_series
from models import ChartRequest


def setup_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Per-frame encoded size chart",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python plot_frame_size.py -i input.mp4 -o out.png                 # byte per frame
  python plot_frame_size.py -i input.mp4 -o out.png --bpp --bits    # bit per pixel
        """,
    )
    parser.add_argument("-i", "--input", required=True, help="Sets a input file path")
    parser.add_argument("-o", "--output", required=True, help="Sets a output file path")
    parser.add_argument(
        "-s",
        "--size",
        type=utils.parse_resolution,
        default=None,
        help="Sets a output size (width:height), default 1920:1080",
    )
    parser.add_argument(
        "--bpp",
        action="store_true",
        help="Sets to output size per pixel",
    )
    parser.add_argument(
        "--bits",
        action="store_true",
        help="Report sizes in bits instead of bytes",
    )
    parser.add_argument("--csv", default=None, help="Also write per-frame values to a CSV file")
    parser.add_argument(
        "-c", "--config", default=None, help="Path to the configuration YAML file"
    )
    parser.add_argument("--log", default=None, help="Write the log to this file")
    parser.add_argument(
        "--no-progress", action="store_true", help="Hide the decoding progress bar"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    return parser


def run(args: argparse.Namespace, config_manager: ConfigManager, logger: logging.Logger) -> None:
    decoder_settings = config_manager.get_decoder_settings()
    output_settings = config_manager.get_output_settings()

    canvas_size = args.size or utils.parse_resolution(output_settings["size"])
    metric = Metric.PER_PIXEL if args.bpp else Metric.RAW
    unit = SizeUnit.BIT if args.bits else SizeUnit[output_settings["unit"].upper()]
    show_progress = bool(decoder_settings["show_progress"]) and not args.no_progress

    backend = init_backend(decoder_settings["ffmpeg_log_level"])
    series = extract_frame_sizes(
        backend, args.input, logger=logger, show_progress=show_progress
    )
    values, y_label = transform_series(series, metric, unit)

    request = ChartRequest(
        series=tuple(values),
        y_axis_label=y_label,
        canvas_size=canvas_size,
        destination=args.output,
    )
    style = ChartStyle.from_settings(config_manager.get_chart_settings())
    chart_existed = os.path.exists(args.output)
    stats = render_chart(request, style)
    logger.info(
        f"Chart {canvas_size.width}x{canvas_size.height}: {stats.count} frames, "
        f"max={stats.maximum:.4f} mean={stats.mean:.4f} {y_label}"
    )

    if args.csv:
        try:
            write_series_csv(series, values, y_label, args.csv)
        except RenderIoError:
            # a failed run leaves no new output behind
            if not chart_existed:
                utils.delete_file(args.output)
            raise
        logger.info(f"Per-frame values saved to: {args.csv}")

    print(f"✓ Chart saved to: {args.output}")
    if args.csv:
        print(f"✓ CSV saved to: {args.csv}")


def main(argv: Optional[List[str]] = None) -> int:
    args = setup_argument_parser().parse_args(argv)

    try:
        config_manager = ConfigManager(config_path=args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    log_settings = config_manager.get_logging_settings()
    level = logging.DEBUG if args.verbose else getattr(logging, log_settings["level"])
    log_path = args.log or log_settings["log_path"] or None
    try:
        logger = utils.create_logger(utils.LOGGER_NAME, log_path, level)
    except OSError as e:
        print(f"Error: cannot open log file {log_path}: {e}", file=sys.stderr)
        return 1

    try:
        run(args, config_manager, logger)
    except FrameSizeError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
