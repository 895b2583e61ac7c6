from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple

from huffman import IOUnavailable

# the C locale's isspace set; Unicode spaces such as U+00A0 are kept as symbols
ASCII_WHITESPACE = " \t\n\r\x0b\x0c"


def read_symbols(path: str | Path, strip_whitespace: bool = True) -> List[str]:
    """
    Read a text file as a list of one-character symbols.

    Bytes that are not valid UTF-8 become lone surrogates (surrogateescape), so any
    file can be read and each such byte is its own symbol. ASCII whitespace is dropped
    unless strip_whitespace is False.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", errors="surrogateescape") as f:
            text = f.read()
    except OSError as e:
        raise IOUnavailable(f"Unable to open the file: {path}") from e

    if strip_whitespace:
        return [ch for ch in text if ch not in ASCII_WHITESPACE]
    return list(text)


def escape_symbol(symbol) -> str:
    # whitespace and backslash are escaped so every table row stays on one line
    text = str(symbol)
    if text == " ":
        return "\\x20"
    if text in ASCII_WHITESPACE or text == "\\":
        return text.encode("unicode_escape").decode("ascii")
    return text


def write_code_table(path: str | Path, rows: Iterable[Tuple[object, int, str]]) -> None:
    path = Path(path)
    try:
        with path.open("w", encoding="utf-8", errors="surrogateescape") as f:
            for symbol, frequency, code in rows:
                f.write(f"{escape_symbol(symbol)}  {frequency}  {code}\n")
    except OSError as e:
        raise IOUnavailable(f"Unable to open the file: {path}") from e


def write_encoded(path: str | Path, bitstring: str) -> None:
    path = Path(path)
    try:
        path.write_text(bitstring + "\n", encoding="utf-8")
    except OSError as e:
        raise IOUnavailable(f"Unable to open the file: {path}") from e


def format_ratio(ratio: float) -> str:
    return f"Compression Ratio: {ratio * 100:.2f}%"
