"""Reading U8 archive structures from an in-memory buffer."""

from __future__ import annotations

from dataclasses import dataclass

U8_MAGIC = b"\x55\xaa\x38\x2d"
WU8_MAGIC = b"WU8a"
WBZ_MAGIC = b"WBZaWU8a"

HEADER_SIZE = 32
NODE_SIZE = 12


class WbzError(Exception):
    """Base class for every error raised while converting archives."""

    message = "WBZ conversion failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class BZipError(WbzError):
    message = "BZip (de)compression failed"


class FileTooBigError(WbzError):
    message = "The file provided is above 4GB in size"


class FileOperationError(WbzError):
    message = "Underlying error when reading from file"


class _MagicError(WbzError):
    def __init__(self, found_magic: bytes) -> None:
        super().__init__()
        self.found_magic = bytes(found_magic)


class InvalidWBZMagicError(_MagicError):
    message = "WBZ file did not contain valid magic"


class InvalidWU8MagicError(_MagicError):
    message = "WU8 file did not contain valid magic"


class InvalidU8MagicError(_MagicError):
    message = "U8 file did not contain valid magic"


class InvalidStringError(WbzError):
    message = "WBZ file contained an invalid string"


class InvalidBoolError(WbzError):
    message = "WBZ file contained an invalid boolean"

    def __init__(self, value: int) -> None:
        super().__init__()
        self.value = value


@dataclass(frozen=True)
class U8Node:
    """One entry of the U8 node table."""

    is_dir: bool
    name_offset: int
    data_offset: int
    size: int


@dataclass(frozen=True)
class U8Header:
    """The fixed 32-byte header at the start of a U8 archive."""

    magic: bytes
    node_offset: int
    meta_size: int
    data_offset: int


class Parser:
    """A big-endian reader with a cursor over a bytes or bytearray buffer.

    The buffer is shared, not copied, so changes made to it elsewhere are
    visible to later reads.
    """

    def __init__(self, data: bytes | bytearray) -> None:
        self.data = data
        self._pos = 0

    def tell(self) -> int:
        return self._pos

    def seek(self, pos: int) -> None:
        if pos < 0:
            raise ValueError(f"cannot seek to negative position {pos}")
        self._pos = pos

    def read(self, n: int) -> bytes:
        end = self._pos + n
        if end > len(self.data):
            raise FileOperationError(
                f"unexpected end of data reading {n} bytes at offset {self._pos}"
            )
        chunk = bytes(self.data[self._pos:end])
        self._pos = end
        return chunk

    def read_byte(self) -> int:
        return self.read(1)[0]

    def read_bool(self) -> bool:
        value = self.read_byte()
        if value == 0:
            return False
        if value == 1:
            return True
        raise InvalidBoolError(value)

    def read_u24(self) -> int:
        return int.from_bytes(self.read(3), "big")

    def read_u32(self) -> int:
        return int.from_bytes(self.read(4), "big")

    def read_string(self, table_start: int, table_offset: int) -> str:
        """Read a NUL-terminated ASCII string from the string table.

        The cursor position is left unchanged.
        """
        start = table_start + table_offset
        end = self.data.find(b"\0", start) if start <= len(self.data) else -1
        raw = bytes(self.data[start:] if end == -1 else self.data[start:end])
        try:
            text = raw.decode("ascii")
        except UnicodeDecodeError as err:
            raise InvalidStringError() from err
        if end == -1:
            raise FileOperationError(
                f"unterminated string at offset {start}"
            )
        return text

    def read_u8_header(self, magic: bytes) -> U8Header:
        header = U8Header(
            magic=self.read(4),
            node_offset=self.read_u32(),
            meta_size=self.read_u32(),
            data_offset=self.read_u32(),
        )
        self.read(16)  # padding
        if header.magic != magic:
            raise InvalidWU8MagicError(header.magic)
        return header

    def read_node(self) -> U8Node:
        return U8Node(
            is_dir=self.read_bool(),
            name_offset=self.read_u24(),
            data_offset=self.read_u32(),
            size=self.read_u32(),
        )