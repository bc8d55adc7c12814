# wbzconv

Convert Mario Kart Wii track archives between the WBZ, WU8 and U8 formats.

A WU8 archive is a U8 archive whose file data has been XOR-obfuscated: files
that also exist in the game's "auto-add" library are XORed with that
library's copy, and all other files with a key derived from them, so the
archive can be shared without the original game files. A WBZ file is a
bzip2-compressed WU8 archive behind a 16-byte header. Converting in either
direction needs a local copy of the auto-add library.

The package uses only the standard library.

## Installation

```
pip install .
```

## Command line

```
wbzconv track.wbz
wbzconv track.u8
wbzconv --auto-add ~/auto-add track.wbz
```

A file ending in `.u8` is encoded and written next to it as `track.wbz`;
any other file is treated as WBZ, decoded, and written next to it as
`track.u8`. An existing output file is overwritten.

`--auto-add` names the auto-add library directory; it defaults to
`/usr/local/share/szs/auto-add/`. Files in the archive are looked up there
by their path inside the archive, directories included; files that are not
found there are treated as non-library files.

Progress is logged to standard output at debug level. On a conversion or
file error the command prints a message to standard error and exits with
status 1.

## Library

```python
from pathlib import Path
from wbzconv.converter import decode_wbz, encode_wbz, decode_wu8, encode_wu8

autoadd = Path("/usr/local/share/szs/auto-add")

with open("track.wbz", "rb") as f:
    u8_data = decode_wbz(f, autoadd)          # bytes of the U8 archive

data = bytearray(u8_data)
with open("track.wbz", "wb") as out:
    encode_wbz(data, out, autoadd)            # data now holds the WU8 archive
```

- `decode_wbz(wbz_file, autoadd_path)` reads a binary file object and
  returns the U8 archive as `bytes`.
- `encode_wbz(u8_data, wbz_file, autoadd_path)` writes the WBZ file to a
  binary file object. `u8_data` must be a `bytearray`; it is converted in
  place and holds the WU8 archive afterwards.
- `decode_wu8(data, autoadd_path)` and `encode_wu8(data, autoadd_path)`
  convert a `bytearray` in place. Passing any other type raises `TypeError`.

Lower-level pieces are available too: `wbzconv.parser.Parser` reads the U8
header, node table and string table from a buffer; `wbzconv.nodes.iter_files`
walks the node table and yields a `FileEntry` for each file with its
auto-add contents, if any; `wbzconv.passes` holds the XOR passes.

### Errors

Conversion errors are raised as subclasses of `wbzconv.parser.WbzError`:

- `InvalidWBZMagicError` – the input does not start with `WBZaWU8a`.
- `InvalidWU8MagicError` – the archive header has the wrong magic. This is
  also raised when the input to `encode_wbz` or `encode_wu8` is not a U8
  archive.
- `BZipError` – the compressed data could not be decompressed.
- `FileOperationError` – the data ended early, a string was unterminated, or
  an auto-add file could not be read.
- `InvalidStringError`, `InvalidBoolError` – malformed names or node flags.
- `FileTooBigError` – the archive is larger than 4 GiB.

Magic errors carry the bytes found in `found_magic`.

## What it does not do

The package converts whole archives only. It does not list, extract or
repack the files inside a U8 archive, and it does not provide the auto-add
library itself.