from typing import Iterator

from podite import (
    FixedLenArray,
    U32,
    U64,
    pod,
)

from jupiter_phoenix.errors import MarketBodyDecodeError

NUM_REGISTERS = 4

LEFT = 0
RIGHT = 1
PARENT = 2
COLOR = 3

SENTINEL = 0


@pod
class TreeHeader:
    root: U32
    padding: FixedLenArray[U32, 3]
    size: U64
    bump_index: U32
    free_list_head: U32

    @classmethod
    def to_bytes(cls, obj, **kwargs):
        return cls.pack(obj, converter="bytes", **kwargs)

    @classmethod
    def from_bytes(cls, raw, **kwargs):
        return cls.unpack(raw, converter="bytes", **kwargs)


class RedBlackTree:
    """Read-only view over a fixed-capacity red-black tree stored in account data.

    Nodes live in a flat array after the header and are addressed by 1-based
    index; index 0 is the sentinel. Every node starts with its registers
    (left, right, parent, color) followed by the key and value. Nodes are only
    decoded when visited.
    """

    def __init__(self, buffer: bytes, node_type, capacity: int):
        self.buffer = buffer
        self.node_type = node_type
        self.capacity = capacity
        self.node_size = node_type.calc_size()
        header_size = TreeHeader.calc_size()
        if len(buffer) < header_size + capacity * self.node_size:
            raise MarketBodyDecodeError(
                f"tree buffer too short: {len(buffer)} bytes for {capacity} nodes"
            )
        self.header = TreeHeader.from_bytes(buffer[:header_size])
        self._nodes_offset = header_size

    @staticmethod
    def calc_size(node_type, capacity: int) -> int:
        return TreeHeader.calc_size() + capacity * node_type.calc_size()

    @property
    def root(self):
        return self.header.root

    def __len__(self):
        return self.header.size

    def get_node(self, index: int):
        if not 0 < index <= self.capacity:
            raise MarketBodyDecodeError(
                f"node index {index} out of range for capacity {self.capacity}"
            )
        start = self._nodes_offset + (index - 1) * self.node_size
        return self.node_type.from_bytes(self.buffer[start: start + self.node_size])

    def iter_nodes(self) -> Iterator:
        """In-order traversal, smallest key first."""
        stack = []
        visited = 0
        index = self.root
        while stack or index != SENTINEL:
            while index != SENTINEL:
                node = self.get_node(index)
                stack.append(node)
                if len(stack) > self.capacity:
                    raise MarketBodyDecodeError("tree contains a cycle")
                index = node.registers[LEFT]
            node = stack.pop()
            visited += 1
            if visited > self.capacity:
                raise MarketBodyDecodeError("tree contains a cycle")
            yield node
            index = node.registers[RIGHT]
