import heapq
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple

Symbol = Hashable


class HuffmanError(Exception):
    pass


class InvalidInput(HuffmanError, ValueError):
    pass


class UnknownSymbol(HuffmanError, KeyError):
    def __init__(self, symbol, position: int):
        super().__init__(symbol)
        self.symbol = symbol
        self.position = position

    def __str__(self):
        return f"symbol {self.symbol!r} at position {self.position} has no code"


class IOUnavailable(HuffmanError, OSError):
    pass


class HuffmanNode: # Node for Huffman tree
    def __init__(self, symbol, frequency, order, left=None, right=None):
        self.symbol = symbol    # None for internal nodes
        self.frequency = frequency
        self.order = order      # creation sequence, breaks frequency ties
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __lt__(self, other):
        return (self.frequency, self.order) < (other.frequency, other.order) # ties go to the older node

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode({self.symbol!r}, {self.frequency})"
        return f"HuffmanNode(<internal>, {self.frequency})"


def freq_table(symbols: Iterable[Symbol]) -> Dict[Symbol, int]:
    ft: Dict[Symbol, int] = {}
    for s in symbols:
        ft[s] = ft.get(s, 0) + 1
    return ft


def build_huffman_tree(frequency_table: Dict[Symbol, int]) -> HuffmanNode: # frequency_table: dict of symbol -> frequency
    """
    Greedy Huffman merge over a min-heap ordered by (frequency, creation order).

    Leaves are numbered in the table's iteration order and every merged node takes
    the next number, so equal weights always resolve the same way.
    """
    if not frequency_table:
        raise InvalidInput("cannot build a Huffman tree from an empty frequency table")

    priority_queue = []
    for order, (symbol, frequency) in enumerate(frequency_table.items()):
        if frequency <= 0:
            raise InvalidInput(f"frequency of {symbol!r} must be positive, got {frequency}")
        priority_queue.append(HuffmanNode(symbol, frequency, order))
    heapq.heapify(priority_queue)

    next_order = len(priority_queue)
    while len(priority_queue) > 1:
        left = heapq.heappop(priority_queue)
        right = heapq.heappop(priority_queue)
        merged_node = HuffmanNode(None, left.frequency + right.frequency, next_order, left, right)
        next_order += 1
        heapq.heappush(priority_queue, merged_node)

    return priority_queue[0] # a lone leaf is its own root


def generate_huffman_codes(root: HuffmanNode) -> Dict[Symbol, str]: # root: root of the Huffman tree
    if root.is_leaf:
        # single-symbol alphabet: an empty code would not be decodable
        return {root.symbol: '0'}

    codes: Dict[Symbol, str] = {}
    def generate_codes_helper(node, current_code):
        if node.is_leaf:
            codes[node.symbol] = current_code
            return
        generate_codes_helper(node.left, current_code + '0')
        generate_codes_helper(node.right, current_code + '1')

    generate_codes_helper(root, '')
    return codes


def huffman_encode(symbols: Iterable[Symbol], code_map: Dict[Symbol, str]) -> str:
    parts = []
    for position, s in enumerate(symbols):
        code = code_map.get(s)
        if code is None:
            raise UnknownSymbol(s, position)
        parts.append(code)
    return ''.join(parts)


def huffman_decode(bitstring: str, root: HuffmanNode) -> List[Symbol]: # bitstring: the encoded string of '0's and '1's
    decoded = []
    if root.is_leaf:
        for i, bit in enumerate(bitstring):
            if bit != '0':
                raise InvalidInput(f"unexpected bit {bit!r} at offset {i} for single-symbol code")
            decoded.append(root.symbol)
        return decoded

    current_node = root
    for i, bit in enumerate(bitstring):
        if bit == '0':
            current_node = current_node.left
        elif bit == '1':
            current_node = current_node.right
        else:
            raise InvalidInput(f"unexpected character {bit!r} at offset {i}")
        if current_node.is_leaf: # reached a leaf
            decoded.append(current_node.symbol)
            current_node = root

    if current_node is not root:
        raise InvalidInput("bit string ends in the middle of a code")
    return decoded


def fixed_width_bits(alphabet_size: int) -> int:
    # ceil(log2(n)) in exact integers
    if alphabet_size <= 1:
        raise InvalidInput(f"alphabet size must be at least 2, got {alphabet_size}")
    return (alphabet_size - 1).bit_length()


def compression_ratio(original_count: int, encoded_bits: int, alphabet_size: int) -> float:
    """
    Encoded size relative to a fixed-width code for the same alphabet.

    The baseline spends ceil(log2(alphabet_size)) bits on every original symbol.
    """
    fixed_width = fixed_width_bits(alphabet_size)
    if original_count <= 0:
        raise InvalidInput(f"original symbol count must be positive, got {original_count}")
    if encoded_bits < 0:
        raise InvalidInput(f"encoded bit count cannot be negative, got {encoded_bits}")

    return encoded_bits / (original_count * fixed_width)


def weighted_length(frequency_table: Dict[Symbol, int], code_map: Dict[Symbol, str]) -> int:
    return sum(freq * len(code_map[s]) for s, freq in frequency_table.items())


def code_table_rows(code_map: Dict[Symbol, str], frequency_table: Dict[Symbol, int]) -> List[Tuple[Symbol, int, str]]:
    return [(s, frequency_table[s], code) for s, code in code_map.items()]


def is_prefix_free(code_map: Dict[Symbol, str]) -> bool:
    # after sorting, a prefix always sorts immediately before some code it prefixes
    codes: Sequence[str] = sorted(code_map.values())
    return all(not b.startswith(a) for a, b in zip(codes, codes[1:]))
