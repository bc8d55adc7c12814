"""Converting between U8, WU8 and WBZ archives."""

from __future__ import annotations

import bz2
import logging
from pathlib import Path
from typing import BinaryIO

from .nodes import iter_files
from .parser import (
    NODE_SIZE,
    U8_MAGIC,
    WBZ_MAGIC,
    WU8_MAGIC,
    BZipError,
    FileOperationError,
    FileTooBigError,
    InvalidWBZMagicError,
    InvalidWU8MagicError,
    Parser,
    WbzError,
)
from .passes import derive_starting_key, header_pass, pass_one, pass_two

log = logging.getLogger(__name__)

_U32_MAX = 0xFFFFFFFF


def _require_bytearray(data: object) -> None:
    if not isinstance(data, bytearray):
        raise TypeError(
            f"archive data must be a bytearray to be converted in place, "
            f"not {type(data).__name__}"
        )


def decode_wbz(wbz_file: BinaryIO, autoadd_path: str | Path) -> bytes:
    """Decompress a WBZ file object and return the equivalent U8 archive."""
    log.debug("Checking signature of WBZ")
    magic = wbz_file.read(8)
    if len(magic) < 8:
        raise FileOperationError("unexpected end of WBZ file while reading magic")
    if magic != WBZ_MAGIC:
        raise InvalidWBZMagicError(magic)
    if len(wbz_file.read(8)) < 8:
        raise FileOperationError("unexpected end of WBZ file while reading header")

    log.debug("Decompressing WU8 file")
    try:
        wu8 = bytearray(bz2.decompress(wbz_file.read()))
    except (OSError, ValueError, EOFError) as err:
        raise BZipError() from err

    decode_wu8(wu8, autoadd_path)
    return bytes(wu8)


def encode_wbz(
    u8_data: bytearray, wbz_file: BinaryIO, autoadd_path: str | Path
) -> None:
    """Compress a U8 archive into a WBZ file written to ``wbz_file``.

    ``u8_data`` is converted in place and holds the WU8 archive afterwards.
    """
    _require_bytearray(u8_data)
    log.debug("Checking signature of U8 file")
    magic = bytes(u8_data[:4])
    if magic != U8_MAGIC:
        raise InvalidWU8MagicError(magic)

    _convert(u8_data, autoadd_path, encode=True)
    size = len(u8_data)
    if size > _U32_MAX:
        raise FileTooBigError()

    wbz_file.write(b"WBZa")
    wbz_file.write(bytes(u8_data[:8]))
    wbz_file.write(size.to_bytes(4, "big"))
    wbz_file.write(bz2.compress(bytes(u8_data), 9))


def decode_wu8(data: bytearray, autoadd_path: str | Path) -> None:
    """Turn a WU8 archive into the equivalent U8 archive in place."""
    _require_bytearray(data)
    _convert(data, autoadd_path, encode=False)


def encode_wu8(data: bytearray, autoadd_path: str | Path) -> None:
    """Turn a U8 archive into the equivalent WU8 archive in place."""
    _require_bytearray(data)
    _convert(data, autoadd_path, encode=True)


def _convert(data: bytearray, autoadd_path: str | Path, *, encode: bool) -> None:
    starting_key = derive_starting_key(len(data))
    parser = Parser(data)

    log.debug("Parsing header")
    header = parser.read_u8_header(U8_MAGIC if encode else WU8_MAGIC)
    start_pos = parser.tell()
    if start_pos != header.node_offset:
        raise WbzError(
            f"node table offset {header.node_offset} does not follow the header "
            f"at {start_pos}"
        )

    if not encode:
        header_pass(data, starting_key, start_pos, header.meta_size)

    log.debug("Calculating offsets for header data")
    root = parser.read_node()
    parser.seek(start_pos)
    string_table_start = header.node_offset + root.size * NODE_SIZE

    derived_key = starting_key
    log.info("Starting pass 1 (XOR all object files with auto-add library)")
    for entry in iter_files(parser, root.size, string_table_start, autoadd_path):
        original = entry.original_data
        if original is None:
            continue
        n = len(original)
        derived_key ^= original[n // 2] ^ original[n // 3] ^ original[n // 4]
        log.debug("Starting %s auto-add XOR", entry.name)
        pass_one(data, original, entry.node, starting_key)

    parser.seek(header.node_offset)
    log.info(
        "Starting pass 2 (XOR all non-object files with derived key %d)", derived_key
    )
    for entry in iter_files(parser, root.size, string_table_start, autoadd_path):
        if entry.original_data is not None:
            continue
        log.debug("Starting %s XOR", entry.name)
        pass_two(data, entry.node, derived_key)

    if encode:
        header_pass(data, starting_key, header.node_offset, header.meta_size)

    data[0:4] = WU8_MAGIC if encode else U8_MAGIC