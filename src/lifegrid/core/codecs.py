"""Reading and writing grids as ascii or packed-bit binary files.

Ascii format::

    <width> <height>
    <height rows of exactly width characters, ' ' dead, '#' alive>

Every line, including the last row, ends with a newline.

Binary format: width and height as native-endian 32-bit unsigned integers,
followed by ``ceil(width * height / 8)`` bytes holding one bit per cell in
row-major order, least significant bit first, 1 for alive. The final byte is
zero padded.
"""

from pathlib import Path
from typing import Tuple, Union
import logging
import re

import numpy as np

from .errors import FormatError, GridIOError
from .grid import Grid

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

ALIVE_CHAR = "#"
DEAD_CHAR = " "

_HEADER_DTYPE = np.dtype(np.uint32)
_HEADER_SIZE = 2 * _HEADER_DTYPE.itemsize
_HEADER_FIELD = re.compile(r"-?[0-9]+")


def _read(path: PathLike, binary: bool) -> Union[str, bytes]:
    try:
        if binary:
            return Path(path).read_bytes()
        with open(path, "r", encoding="ascii", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FormatError(f"not a text file ({e.reason})", str(path)) from e
    except OSError as e:
        raise GridIOError(f"Cannot read grid file {path}: {e.strerror or e}") from e


def _write(path: PathLike, data: Union[str, bytes]) -> None:
    try:
        if isinstance(data, bytes):
            Path(path).write_bytes(data)
        else:
            with open(path, "w", encoding="ascii", newline="") as f:
                f.write(data)
    except OSError as e:
        raise GridIOError(f"Cannot write grid file {path}: {e.strerror or e}") from e


def _parse_header(line: str, path: str) -> Tuple[int, int]:
    fields = line.split(" ")
    if len(fields) != 2:
        raise FormatError(f"expected '<width> <height>' header, got {line!r}", path)
    if not all(_HEADER_FIELD.fullmatch(field) for field in fields):
        raise FormatError(f"unparsable header {line!r}", path)
    width, height = int(fields[0]), int(fields[1])
    if width < 0 or height < 0:
        raise FormatError(f"negative dimensions in header {line!r}", path)
    return width, height


def parse_ascii(text: str, path: str = "<string>") -> Grid:
    """Parse the ascii grid format.

    Raises:
        FormatError: If the header, a row or a newline is malformed
    """
    lines = text.split("\n")
    if len(lines) < 2:
        raise FormatError("missing newline after header", path)

    width, height = _parse_header(lines[0], path)

    # A row is only newline-terminated if another element follows it
    terminated_rows = len(lines) - 2
    if terminated_rows < height:
        if lines[-1]:
            raise FormatError(f"line {len(lines)}: missing newline at end of row", path)
        raise FormatError(f"expected {height} rows, found {terminated_rows}", path)

    rows = lines[1 : height + 1]
    for y, row in enumerate(rows):
        line_no = y + 2
        if len(row) != width:
            raise FormatError(f"line {line_no}: expected {width} cells, found {len(row)}", path)
        for x, char in enumerate(row):
            if char != ALIVE_CHAR and char != DEAD_CHAR:
                raise FormatError(f"line {line_no}: unexpected character {char!r} at column {x}", path)

    grid = Grid(width, height)
    cells = grid._grid_view()
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == ALIVE_CHAR:
                cells[y, x] = 1

    return grid


def format_ascii(grid: Grid) -> str:
    """Render a grid in the ascii grid format."""
    lines = [f"{grid.width} {grid.height}\n"]
    for row in grid.cells:
        lines.append("".join(ALIVE_CHAR if cell else DEAD_CHAR for cell in row) + "\n")
    return "".join(lines)


def load_ascii(path: PathLike) -> Grid:
    """Load a grid from an ascii file.

    Raises:
        GridIOError: If the file cannot be read
        FormatError: If the file is malformed
    """
    grid = parse_ascii(_read(path, binary=False), str(path))
    logger.debug("Loaded %dx%d ascii grid from %s", grid.width, grid.height, path)
    return grid


def save_ascii(path: PathLike, grid: Grid) -> None:
    """Save a grid to an ascii file.

    Raises:
        GridIOError: If the file cannot be written
    """
    _write(path, format_ascii(grid))
    logger.debug("Saved %dx%d ascii grid to %s", grid.width, grid.height, path)


def decode_binary(data: bytes, path: str = "<bytes>") -> Grid:
    """Decode the packed-bit binary grid format.

    Raises:
        FormatError: If the header or the cell payload is truncated
    """
    if len(data) < _HEADER_SIZE:
        raise FormatError(f"header needs {_HEADER_SIZE} bytes, found {len(data)}", path)

    width, height = (int(v) for v in np.frombuffer(data[:_HEADER_SIZE], dtype=_HEADER_DTYPE))
    total = width * height
    payload = np.frombuffer(data[_HEADER_SIZE:], dtype=np.uint8)
    if payload.size * 8 < total:
        raise FormatError(
            f"truncated payload: {width}x{height} grid needs {total} bits, found {payload.size * 8}",
            path,
        )

    bits = np.unpackbits(payload, bitorder="little")[:total]
    grid = Grid(width, height)
    grid._grid_view()[:, :] = bits.reshape(height, width)
    return grid


def encode_binary(grid: Grid) -> bytes:
    """Encode a grid in the packed-bit binary format."""
    header = np.array([grid.width, grid.height], dtype=_HEADER_DTYPE).tobytes()
    payload = np.packbits(grid.cells.reshape(-1), bitorder="little").tobytes()
    return header + payload


def load_binary(path: PathLike) -> Grid:
    """Load a grid from a binary file.

    Raises:
        GridIOError: If the file cannot be read
        FormatError: If the file is malformed
    """
    grid = decode_binary(_read(path, binary=True), str(path))
    logger.debug("Loaded %dx%d binary grid from %s", grid.width, grid.height, path)
    return grid


def save_binary(path: PathLike, grid: Grid) -> None:
    """Save a grid to a binary file.

    Raises:
        GridIOError: If the file cannot be written
    """
    _write(path, encode_binary(grid))
    logger.debug("Saved %dx%d binary grid to %s", grid.width, grid.height, path)


def is_binary_path(path: PathLike) -> bool:
    """Whether a path names a binary grid file (``.bin`` suffix)."""
    return Path(path).suffix.lower() == ".bin"


def load(path: PathLike) -> Grid:
    """Load a grid, choosing the format from the file suffix."""
    return load_binary(path) if is_binary_path(path) else load_ascii(path)


def save(path: PathLike, grid: Grid) -> None:
    """Save a grid, choosing the format from the file suffix."""
    if is_binary_path(path):
        save_binary(path, grid)
    else:
        save_ascii(path, grid)
