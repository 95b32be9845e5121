#!/usr/bin/env python3
"""
batch_summary.py

Decode every file under an input path and write one CSV row per file:

    file_path, ok, magic, width, height, maxval, depth, error_kind, error

Failures do not stop the run; they are recorded in the row (and echoed to
stderr as [warn] lines unless --quiet).

Usage
=====

python -m pnmdecode.tools.batch_summary --input-path images/ --out summary.csv
python -m pnmdecode.tools.batch_summary --input-path images/ --recursive --out summary.csv
"""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

import pandas as pd

from pnmdecode import CollectingSink, load

COLUMNS = ["file_path", "ok", "magic", "width", "height", "maxval", "depth", "error_kind", "error"]


def discover_files(input_path: str, recursive: bool = False) -> List[str]:
    """
    - file      -> [abs(input_path)]
    - directory -> regular files directly under it (all levels with recursive=True)
    - otherwise -> ValueError
    """
    if os.path.isfile(input_path):
        return [os.path.abspath(input_path)]

    if os.path.isdir(input_path):
        files: List[str] = []
        if recursive:
            for root, _dirs, names in os.walk(input_path):
                for n in names:
                    files.append(os.path.abspath(os.path.join(root, n)))
        else:
            for entry in os.scandir(input_path):
                if entry.is_file():
                    files.append(os.path.abspath(entry.path))
        return sorted(files)

    raise ValueError(f"input-path is neither a file nor a directory: {input_path}")


def summarize_file(path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    sink = CollectingSink()
    result = load(path, sink=sink, params=params)
    row: Dict[str, Any] = {
        "file_path": path,
        "ok": result.ok,
        "magic": "",
        "width": result.width,
        "height": result.height,
        "maxval": None,
        "depth": None,
        "error_kind": "",
        "error": "",
    }
    if result.ok:
        img = result.image
        row.update(magic=img.magic, maxval=img.maxval, depth=img.depth)
    else:
        diag = sink.last
        row.update(error_kind=diag.kind, error=diag.message)
    return row


def summarize(files: List[str], params: Optional[Dict[str, Any]] = None, quiet: bool = False) -> pd.DataFrame:
    rows = []
    for path in files:
        row = summarize_file(path, params=params)
        if not row["ok"] and not quiet:
            print(f"[warn] {path}: {row['error_kind']}: {row['error']}", file=sys.stderr)
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=COLUMNS)
    return pd.DataFrame(rows, columns=COLUMNS)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Decode many PNM/PAM files and summarize the outcome as CSV.")
    ap.add_argument("--input-path", required=True, help="file or directory to scan")
    ap.add_argument("--out", required=True, help="CSV output path")
    ap.add_argument("--recursive", action="store_true")
    ap.add_argument("--strict-bitmap", action="store_true")
    ap.add_argument("--pbm-row-padding", action="store_true",
                    help="P4 rows start on a byte boundary (Netpbm layout) instead of running on across rows")
    ap.add_argument("--max-pixels", type=int, default=None)
    ap.add_argument("--quiet", action="store_true", help="do not echo failures to stderr")
    args = ap.parse_args(argv)
    if args.max_pixels is not None and args.max_pixels <= 0:
        ap.error("--max-pixels must be a positive integer.")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        files = discover_files(args.input_path, recursive=args.recursive)
    except ValueError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    if not files:
        print("[error] No files found to decode.", file=sys.stderr)
        return 1

    params: Dict[str, Any] = {
        "strict_bitmap": args.strict_bitmap,
        "pbm_row_padding": args.pbm_row_padding,
    }
    if args.max_pixels is not None:
        params["max_pixels"] = args.max_pixels

    df = summarize(files, params=params, quiet=args.quiet)
    out_dir = os.path.dirname(os.path.abspath(args.out))
    os.makedirs(out_dir, exist_ok=True)
    df.to_csv(args.out, index=False)

    n_ok = int(df["ok"].sum())
    print(f"Decoded {n_ok}/{len(df)} files. Summary written to: {args.out}")
    return 0 if n_ok > 0 else 1


if __name__ == "__main__":
    sys.exit(main())
