"""The XOR passes that turn U8 archives into WU8 archives and back."""

from __future__ import annotations

import logging
from itertools import cycle

from .parser import FileTooBigError, U8Node

log = logging.getLogger(__name__)

_U32_MAX = 0xFFFFFFFF


def derive_starting_key(size: int) -> int:
    """Return the XOR of the four little-endian bytes of ``size``."""
    if size < 0:
        raise ValueError(f"size must not be negative: {size}")
    if size > _U32_MAX:
        raise FileTooBigError()
    key = 0
    for byte in size.to_bytes(4, "little"):
        key ^= byte
    log.info("Derived starting key: %d", key)
    return key


def header_pass(data: bytearray, key: int, start_pos: int, meta_size: int) -> None:
    """XOR the node table and string table bytes with ``key`` in place."""
    log.debug("Performing node header data pass")
    region = data[start_pos:start_pos + meta_size]
    data[start_pos:start_pos + len(region)] = bytes(b ^ key for b in region)


def pass_one(
    data: bytearray, original_data: bytes, node: U8Node, starting_key: int
) -> None:
    """XOR a file's bytes with the matching auto-add file, repeated as needed."""
    start = node.data_offset
    end = start + node.size
    if end > len(data):
        raise IndexError(f"file data {start}..{end} lies outside the archive")
    if node.size and not original_data:
        raise IndexError("auto-add data is empty")
    region = data[start:end]
    data[start:end] = bytes(
        b ^ starting_key ^ o for b, o in zip(region, cycle(original_data))
    )


def pass_two(data: bytearray, node: U8Node, derived_key: int) -> None:
    """XOR a file's bytes with the derived key in place."""
    start = node.data_offset
    region = data[start:start + node.size]
    data[start:start + len(region)] = bytes(b ^ derived_key for b in region)