"""
Huffman-code a text file and report the compression ratio.

How to run:
  python compress.py --input original.txt --table table.txt
  python compress.py --input notes.txt --table notes_table.txt --encoded notes.bits

The code table is written as one "<symbol>  <frequency>  <code>" line per symbol.
The ratio compares the encoded bit count against a fixed-width code
of ceil(log2(alphabet size)) bits per symbol.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import huffman as huff
import textio


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Huffman-code a text file and report the compression ratio")
    ap.add_argument("--input", type=str, default="original.txt", help="Text file to compress")
    ap.add_argument("--table", type=str, default="table.txt", help="Where to write the code table")
    ap.add_argument("--encoded", type=str, default=None, help="Optional path for the encoded 0/1 stream")
    ap.add_argument("--keep-whitespace", action="store_true", help="Encode whitespace instead of dropping it")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        symbols = textio.read_symbols(args.input, strip_whitespace=not args.keep_whitespace)
    except huff.IOUnavailable as e:
        print(e, file=sys.stderr)
        return 1

    stage = "frequency count"
    try:
        ft = huff.freq_table(symbols)
        stage = "tree build"
        root = huff.build_huffman_tree(ft)
        stage = "code generation"
        code_map = huff.generate_huffman_codes(root)
        stage = "encode"
        encoded = huff.huffman_encode(symbols, code_map)

        # table is only persisted once every symbol has been encoded
        stage = "write code table"
        textio.write_code_table(args.table, huff.code_table_rows(code_map, ft))
        if args.encoded:
            stage = "write encoded stream"
            textio.write_encoded(args.encoded, encoded)

        stage = "compression ratio"
        ratio = huff.compression_ratio(len(symbols), len(encoded), len(ft))
    except huff.HuffmanError as e:
        print(f"{stage} failed: {e}", file=sys.stderr)
        return 1

    print(f"Symbols: {len(symbols)}  Alphabet: {len(ft)}  Encoded bits: {len(encoded)}")
    print(textio.format_ratio(ratio))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
