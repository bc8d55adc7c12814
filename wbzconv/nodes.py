"""Walking the node table of a U8 archive."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .parser import FileOperationError, Parser, U8Node

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """A file node, with the matching auto-add file's contents if one exists."""

    node: U8Node
    name: str
    original_data: bytes | None


def iter_files(
    parser: Parser,
    node_count: int,
    string_table_start: int,
    autoadd_path: str | Path,
) -> Iterator[FileEntry]:
    """Yield every file node read from the parser's current position.

    Directory nodes are tracked to build each file's path below
    ``autoadd_path``; they are not yielded themselves.
    """
    base = Path(autoadd_path)
    dir_stack: list[U8Node] = []

    for index in range(node_count):
        node = parser.read_node()
        name = parser.read_string(string_table_start, node.name_offset)

        while dir_stack and dir_stack[-1].size == index:
            if log.isEnabledFor(logging.DEBUG):
                try:
                    dir_name = parser.read_string(
                        string_table_start, dir_stack[-1].name_offset
                    )
                except Exception:
                    dir_name = "No name!"
                log.debug("Found the end of %s", dir_name)
            dir_stack.pop()

        if node.is_dir:
            log.debug("Entering directory %s", name)
            dir_stack.append(node)
            continue

        dir_names = [
            parser.read_string(string_table_start, d.name_offset) for d in dir_stack
        ]
        path = base.joinpath(*dir_names, name)

        try:
            original_data: bytes | None = path.read_bytes()
        except FileNotFoundError:
            original_data = None
        except OSError as err:
            raise FileOperationError(f"cannot read {path}: {err}") from err

        yield FileEntry(node=node, name=name, original_data=original_data)