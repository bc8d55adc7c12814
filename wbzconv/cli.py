"""Command line entry point converting between U8 and WBZ files."""

from __future__ import annotations

import argparse
import io
import logging
import sys
from pathlib import Path

from .converter import decode_wbz, encode_wbz
from .parser import WbzError

DEFAULT_AUTOADD = Path("/usr/local/share/szs/auto-add/")


def output_path(path: str | Path, ext: str) -> Path:
    """Return ``path`` with its final suffix replaced by ``ext``."""
    path = Path(path)
    return path.with_name(path.stem + ext)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="wbzconv",
        description="Convert a .u8 file to .wbz, or any other file from WBZ to .u8.",
    )
    parser.add_argument("file", type=Path, help="path to the file to convert")
    parser.add_argument(
        "--auto-add",
        dest="autoadd",
        type=Path,
        default=DEFAULT_AUTOADD,
        help=f"auto-add library directory (default: {DEFAULT_AUTOADD})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG, format="[%(levelname)s] %(message)s", stream=sys.stdout
    )

    path: Path = args.file
    try:
        if path.suffix == ".u8":
            data = bytearray(path.read_bytes())
            out = io.BytesIO()
            encode_wbz(data, out, args.autoadd)
            result, ext = out.getvalue(), ".wbz"
        else:
            with path.open("rb") as wbz_file:
                result = decode_wbz(wbz_file, args.autoadd)
            ext = ".u8"
        output_path(path, ext).write_bytes(result)
    except (WbzError, OSError) as err:
        print(f"wbzconv: {path}: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())