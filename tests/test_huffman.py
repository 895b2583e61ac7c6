import itertools
from fractions import Fraction

import pytest

import huffman as huff


TEXTBOOK = {'a': 5, 'b': 9, 'c': 12, 'd': 13, 'e': 16, 'f': 45}


def walk(node):
    yield node
    if not node.is_leaf:
        yield from walk(node.left)
        yield from walk(node.right)


def brute_force_optimum(weights):
    # cheapest length assignment that satisfies Kraft's inequality
    n = len(weights)
    best = None
    for lengths in itertools.product(range(1, n), repeat=n):
        if sum(Fraction(1, 2 ** l) for l in lengths) <= 1:
            cost = sum(w * l for w, l in zip(weights, lengths))
            if best is None or cost < best:
                best = cost
    return best


def test_freq_table_counts_in_first_seen_order():
    ft = huff.freq_table("abracadabra")
    assert ft == {'a': 5, 'b': 2, 'r': 2, 'c': 1, 'd': 1}
    assert list(ft) == ['a', 'b', 'r', 'c', 'd']


def test_empty_table_rejected():
    with pytest.raises(huff.InvalidInput):
        huff.build_huffman_tree({})


def test_non_positive_frequency_rejected():
    with pytest.raises(huff.InvalidInput):
        huff.build_huffman_tree({'a': 3, 'b': 0})


def test_tree_has_one_leaf_per_symbol_and_summed_weights():
    root = huff.build_huffman_tree(TEXTBOOK)
    nodes = list(walk(root))
    leaves = [n for n in nodes if n.is_leaf]
    assert sorted(n.symbol for n in leaves) == sorted(TEXTBOOK)
    for n in leaves:
        assert n.frequency == TEXTBOOK[n.symbol]
    for n in nodes:
        if not n.is_leaf:
            assert n.left is not None and n.right is not None
            assert n.frequency == n.left.frequency + n.right.frequency
    assert root.frequency == sum(TEXTBOOK.values())


def test_textbook_distribution():
    root = huff.build_huffman_tree(TEXTBOOK)
    codes = huff.generate_huffman_codes(root)
    assert huff.weighted_length(TEXTBOOK, codes) == 224
    assert len(codes['f']) == 1
    assert len(codes['a']) == 4
    assert len(codes['b']) == 4
    assert codes == {'f': '0', 'c': '100', 'd': '101', 'a': '1100', 'b': '1101', 'e': '111'}


def test_aaaabbbcc():
    data = "aaaabbbcc"
    ft = huff.freq_table(data)
    codes = huff.generate_huffman_codes(huff.build_huffman_tree(ft))
    encoded = huff.huffman_encode(data, codes)
    assert codes == {'a': '0', 'c': '10', 'b': '11'}
    assert encoded == "00001111111010"
    assert len(encoded) == brute_force_optimum([4, 3, 2]) == 14


def test_equal_weights_break_ties_by_creation_order():
    ft = {'x': 1, 'y': 1, 'z': 1, 'w': 1}
    codes = huff.generate_huffman_codes(huff.build_huffman_tree(ft))
    # x+y merge first, then z+w, then the two pairs
    assert codes == {'x': '00', 'y': '01', 'z': '10', 'w': '11'}
    assert huff.generate_huffman_codes(huff.build_huffman_tree(dict(ft))) == codes


def test_codes_are_prefix_free():
    for ft in (TEXTBOOK, {'a': 1, 'b': 1}, {c: i + 1 for i, c in enumerate("abcdefghij")}):
        codes = huff.generate_huffman_codes(huff.build_huffman_tree(ft))
        assert huff.is_prefix_free(codes)
        assert all(codes.values())


def test_is_prefix_free_detects_prefix():
    assert not huff.is_prefix_free({'a': '0', 'b': '01', 'c': '1'})
    assert not huff.is_prefix_free({'a': '10', 'b': '10'})
    assert huff.is_prefix_free({'a': '0', 'b': '10', 'c': '11'})


def test_generate_codes_is_idempotent():
    root = huff.build_huffman_tree(TEXTBOOK)
    assert huff.generate_huffman_codes(root) == huff.generate_huffman_codes(root)


@pytest.mark.parametrize("weights", [
    [1, 1],
    [5, 1, 1],
    [4, 3, 2, 1],
    [7, 7, 7, 7, 7],
    [1, 2, 4, 8, 16],
    [10, 3, 3, 2, 9],
])
def test_weighted_length_is_optimal(weights):
    ft = {chr(ord('a') + i): w for i, w in enumerate(weights)}
    codes = huff.generate_huffman_codes(huff.build_huffman_tree(ft))
    assert huff.weighted_length(ft, codes) == brute_force_optimum(weights)


def test_single_symbol_alphabet():
    root = huff.build_huffman_tree({'q': 6})
    assert root.is_leaf
    assert root.symbol == 'q'
    codes = huff.generate_huffman_codes(root)
    assert codes == {'q': '0'}
    encoded = huff.huffman_encode("qqqqqq", codes)
    assert encoded == "000000"
    assert huff.huffman_decode(encoded, root) == list("qqqqqq")


def test_encode_unknown_symbol_fails_fast():
    codes = {'a': '0', 'b': '1'}
    with pytest.raises(huff.UnknownSymbol) as exc_info:
        huff.huffman_encode("abzab", codes)
    assert exc_info.value.symbol == 'z'
    assert exc_info.value.position == 2
    assert isinstance(exc_info.value, KeyError)


def test_encode_length_matches_code_table():
    data = "mississippi river"
    ft = huff.freq_table(data)
    codes = huff.generate_huffman_codes(huff.build_huffman_tree(ft))
    encoded = huff.huffman_encode(data, codes)
    assert len(encoded) == sum(len(codes[ch]) for ch in data) == huff.weighted_length(ft, codes)
    assert set(encoded) <= {'0', '1'}


def test_roundtrip_text_and_bytes():
    for data in ("the quick brown fox jumps over the lazy dog", list(b"\x00\x01\x01\xff\xff\xff")):
        ft = huff.freq_table(data)
        root = huff.build_huffman_tree(ft)
        encoded = huff.huffman_encode(data, huff.generate_huffman_codes(root))
        assert huff.huffman_decode(encoded, root) == list(data)


def test_decode_rejects_truncated_and_bad_input():
    root = huff.build_huffman_tree(TEXTBOOK)
    with pytest.raises(huff.InvalidInput):
        huff.huffman_decode("110", root)
    with pytest.raises(huff.InvalidInput):
        huff.huffman_decode("0x1", root)
    with pytest.raises(huff.InvalidInput):
        huff.huffman_decode("001", huff.build_huffman_tree({'q': 1}))


def test_compression_ratio():
    # 4 symbols need 2 bits each at fixed width
    assert huff.compression_ratio(10, 15, 4) == pytest.approx(0.75)
    # ceil(log2(5)) == 3
    assert huff.compression_ratio(9, 14, 5) == pytest.approx(14 / 27)
    assert huff.compression_ratio(9, 14, 3) == pytest.approx(14 / 18)
    assert huff.compression_ratio(100, 224, 6) == pytest.approx(224 / 300)


@pytest.mark.parametrize("args", [(10, 10, 1), (10, 10, 0), (0, 0, 4), (10, -1, 4)])
def test_compression_ratio_guards(args):
    with pytest.raises(huff.InvalidInput):
        huff.compression_ratio(*args)


def test_code_table_rows_follow_code_order():
    ft = huff.freq_table("aaaabbbcc")
    codes = huff.generate_huffman_codes(huff.build_huffman_tree(ft))
    assert huff.code_table_rows(codes, ft) == [('a', 4, '0'), ('c', 2, '10'), ('b', 3, '11')]


def test_error_hierarchy():
    assert issubclass(huff.InvalidInput, ValueError)
    assert issubclass(huff.IOUnavailable, OSError)
    for cls in (huff.InvalidInput, huff.UnknownSymbol, huff.IOUnavailable):
        assert issubclass(cls, huff.HuffmanError)


def test_fixed_width_bits():
    assert [huff.fixed_width_bits(n) for n in (2, 3, 4, 5, 8, 9, 256, 257)] == [1, 2, 2, 3, 3, 4, 8, 9]
    with pytest.raises(huff.InvalidInput):
        huff.fixed_width_bits(1)
