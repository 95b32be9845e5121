#!/usr/bin/env python3
"""
inspect_pnm.py

Decode a single PBM/PGM/PPM/PAM file and print what came out of it:
magic, dimensions, source maxval/depth and per-channel statistics of the
normalized RGBA buffer.

Usage
=====

python -m pnmdecode.tools.inspect_pnm image.pgm
python -m pnmdecode.tools.inspect_pnm image.pam --png preview.png --json report.json
python -m pnmdecode.tools.inspect_pnm scan.pbm --strict-bitmap --debug

Requirements
============
- numpy
- matplotlib
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

import numpy as np
import matplotlib.pyplot as plt

from pnmdecode import load
from pnmdecode.pnm_types import PnmImage

CHANNELS = ("r", "g", "b", "a")


def channel_stats(image: PnmImage) -> Dict[str, Dict[str, float]]:
    rgba = image.rgba()
    out: Dict[str, Dict[str, float]] = {}
    for i, name in enumerate(CHANNELS):
        ch = rgba[:, :, i]
        out[name] = {
            "min": int(ch.min()),
            "max": int(ch.max()),
            "mean": round(float(ch.mean()), 3),
        }
    return out


def build_report(path: str, image: PnmImage) -> Dict[str, Any]:
    return {
        "file_path": os.path.abspath(path),
        "magic": image.magic,
        "width": image.width,
        "height": image.height,
        "maxval": image.maxval,
        "depth": image.depth,
        "opaque": bool(np.all((image.pixels & 0xFF) == 0xFF)),
        "channels": channel_stats(image),
    }


def pretty_print(report: Dict[str, Any]) -> None:
    print(f"== {report['file_path']} ==")
    print(f"   - format={report['magic']} size={report['width']}x{report['height']} "
          f"maxval={report['maxval']} depth={report['depth']} opaque={report['opaque']}")
    for name, st in report["channels"].items():
        print(f"   - {name}: min={st['min']} max={st['max']} mean={st['mean']:.3f}")


def write_png(image: PnmImage, out_path: str) -> None:
    plt.imsave(out_path, image.rgba())


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Decode a PNM/PAM file and report on it.")
    ap.add_argument("path")
    ap.add_argument("--png", help="write an RGBA PNG preview to this path")
    ap.add_argument("--json", help="write the report as JSON to this path")
    ap.add_argument("--strict-bitmap", action="store_true",
                    help="reject stray characters in P1 pixel data instead of skipping them")
    ap.add_argument("--pbm-row-padding", action="store_true",
                    help="P4 rows start on a byte boundary (Netpbm layout) instead of running on across rows")
    ap.add_argument("--max-pixels", type=int, default=None, help="refuse images larger than this")
    ap.add_argument("--debug", action="store_true")
    return ap.parse_args(argv)


def params_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "strict_bitmap": args.strict_bitmap,
        "pbm_row_padding": args.pbm_row_padding,
        "debug": args.debug,
    }
    if args.max_pixels is not None:
        params["max_pixels"] = args.max_pixels
    return params


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if not os.path.isfile(args.path):
        print(f"no such file: {args.path}", file=sys.stderr)
        return 2

    result = load(args.path, params=params_from_args(args))
    if not result.ok:
        return 1

    report = build_report(args.path, result.image)
    pretty_print(report)

    if args.png:
        write_png(result.image, args.png)
        print(f"Preview written to: {args.png}")

    if args.json:
        with open(args.json, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)

    return 0


if __name__ == "__main__":
    sys.exit(main())
