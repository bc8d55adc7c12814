import pytest

from wbzconv.nodes import FileEntry, iter_files
from wbzconv.parser import (
    U8_MAGIC,
    FileOperationError,
    InvalidStringError,
    Parser,
    U8Node,
)


def node_bytes(is_dir, name_offset, data_offset, size):
    return (
        bytes([int(is_dir)])
        + name_offset.to_bytes(3, "big")
        + data_offset.to_bytes(4, "big")
        + size.to_bytes(4, "big")
    )


def build_archive(entries):
    """Return (archive bytes, string table start) for (is_dir, name, off, size) entries."""
    nodes = bytearray()
    table = bytearray()
    for is_dir, name, data_offset, size in entries:
        offset = len(table)
        table += name + b"\0"
        nodes += node_bytes(is_dir, offset, data_offset, size)
    meta_size = len(nodes) + len(table)
    header = (
        U8_MAGIC
        + (32).to_bytes(4, "big")
        + meta_size.to_bytes(4, "big")
        + (32 + meta_size).to_bytes(4, "big")
        + bytes(16)
    )
    return bytearray(header + nodes + table), 32 + len(nodes)


ENTRIES = [
    (True, b"", 0, 5),
    (False, b"a.bin", 100, 3),
    (True, b"sub", 0, 4),
    (False, b"b.bin", 200, 7),
    (False, b"c.bin", 300, 9),
]


def walk(entries, autoadd_path):
    data, table_start = build_archive(entries)
    parser = Parser(data)
    parser.seek(32)
    return list(iter_files(parser, len(entries), table_start, autoadd_path))


def test_yields_files_only_in_order(tmp_path):
    files = walk(ENTRIES, tmp_path)
    assert [f.name for f in files] == ["a.bin", "b.bin", "c.bin"]
    assert [f.node.data_offset for f in files] == [100, 200, 300]
    assert [f.node.size for f in files] == [3, 7, 9]
    assert all(not f.node.is_dir for f in files)


def test_missing_autoadd_files_give_none(tmp_path):
    files = walk(ENTRIES, tmp_path)
    assert [f.original_data for f in files] == [None, None, None]


def test_reads_autoadd_file_inside_directory(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.bin").write_bytes(b"payload")
    files = walk(ENTRIES, tmp_path)
    assert files[1] == FileEntry(
        node=U8Node(is_dir=False, name_offset=11, data_offset=200, size=7),
        name="b.bin",
        original_data=b"payload",
    )


def test_directory_ends_before_following_file(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.bin").write_bytes(b"wrong")
    (tmp_path / "c.bin").write_bytes(b"right")
    files = walk(ENTRIES, tmp_path)
    assert files[2].original_data == b"right"


def test_top_level_file_found(tmp_path):
    (tmp_path / "a.bin").write_bytes(b"abc")
    files = walk(ENTRIES, tmp_path)
    assert files[0].original_data == b"abc"


def test_unreadable_path_raises(tmp_path):
    (tmp_path / "a.bin").mkdir()
    with pytest.raises(FileOperationError):
        walk(ENTRIES, tmp_path)


def test_invalid_name_raises(tmp_path):
    entries = [(True, b"", 0, 2), (False, b"bad\xff", 0, 1)]
    with pytest.raises(InvalidStringError):
        walk(entries, tmp_path)


def test_zero_nodes_yields_nothing(tmp_path):
    data, table_start = build_archive(ENTRIES)
    parser = Parser(data)
    parser.seek(32)
    assert list(iter_files(parser, 0, table_start, tmp_path)) == []
    assert parser.tell() == 32


def test_iteration_advances_through_node_table(tmp_path):
    data, table_start = build_archive(ENTRIES)
    parser = Parser(data)
    parser.seek(32)
    list(iter_files(parser, len(ENTRIES), table_start, tmp_path))
    assert parser.tell() == table_start


def test_truncated_node_table_raises(tmp_path):
    data, table_start = build_archive(ENTRIES)
    parser = Parser(data[:40])
    parser.seek(32)
    with pytest.raises(FileOperationError):
        list(iter_files(parser, len(ENTRIES), table_start, tmp_path))