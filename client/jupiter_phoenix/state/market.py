from typing import List, Optional

from podite import (
    FixedLenArray,
    U32,
    U64,
    U8,
    pod,
)

from jupiter_phoenix.errors import MarketBodyDecodeError
from jupiter_phoenix.ladder import Ladder, LadderOrder

from .header import MarketSizeParams
from .red_black_tree import NUM_REGISTERS, RedBlackTree


@pod
class FifoOrderId:
    price_in_ticks: U64
    order_sequence_number: U64


@pod
class FifoRestingOrder:
    trader_index: U64
    num_base_lots: U64
    last_valid_slot: U64
    last_valid_unix_timestamp_in_seconds: U64

    def is_expired(self, current_slot: Optional[int], current_unix_timestamp: Optional[int]) -> bool:
        # zero means the order has no time in force
        if current_slot is not None and self.last_valid_slot != 0:
            if self.last_valid_slot < current_slot:
                return True
        if current_unix_timestamp is not None and self.last_valid_unix_timestamp_in_seconds != 0:
            if self.last_valid_unix_timestamp_in_seconds < current_unix_timestamp:
                return True
        return False


@pod
class OrderNode:
    registers: FixedLenArray[U32, NUM_REGISTERS]
    key: FifoOrderId
    value: FifoRestingOrder

    @classmethod
    def to_bytes(cls, obj, **kwargs):
        return cls.pack(obj, converter="bytes", **kwargs)

    @classmethod
    def from_bytes(cls, raw, **kwargs):
        return cls.unpack(raw, converter="bytes", **kwargs)


@pod
class TraderState:
    quote_lots_locked: U64
    quote_lots_free: U64
    base_lots_locked: U64
    base_lots_free: U64
    padding: FixedLenArray[U64, 8]


@pod
class TraderNode:
    registers: FixedLenArray[U32, NUM_REGISTERS]
    key: FixedLenArray[U8, 32]
    value: TraderState

    @classmethod
    def from_bytes(cls, raw, **kwargs):
        return cls.unpack(raw, converter="bytes", **kwargs)


@pod
class FifoMarketHeader:
    padding: FixedLenArray[U64, 32]
    base_lots_per_base_unit: U64
    tick_size_in_quote_lots_per_base_unit: U64
    order_sequence_number: U64
    taker_fee_bps: U64
    collected_quote_lot_fees: U64
    unclaimed_quote_lot_fees: U64

    @classmethod
    def to_bytes(cls, obj, **kwargs):
        return cls.pack(obj, converter="bytes", **kwargs)

    @classmethod
    def from_bytes(cls, raw, **kwargs):
        return cls.unpack(raw, converter="bytes", **kwargs)


class FifoMarket:
    """Market body: fee and unit parameters followed by bids, asks and seats trees.

    Tree capacities come from the market size params, so the byte offsets of
    each tree are fixed once the layout is known. Bid keys order higher prices
    first, so both trees are read best first by a plain in-order walk.
    """

    def __init__(self, size_params: MarketSizeParams, buffer: bytes):
        self.size_params = size_params
        expected = self.calc_size(size_params)
        if len(buffer) < expected:
            raise MarketBodyDecodeError(
                f"market body is {len(buffer)} bytes, layout "
                f"{size_params.as_tuple()} needs {expected}"
            )
        header_size = FifoMarketHeader.calc_size()
        bids_size = RedBlackTree.calc_size(OrderNode, size_params.bids_size)
        asks_size = RedBlackTree.calc_size(OrderNode, size_params.asks_size)

        self.header = FifoMarketHeader.from_bytes(buffer[:header_size])
        offset = header_size
        self.bids = RedBlackTree(buffer[offset: offset + bids_size], OrderNode, size_params.bids_size)
        offset += bids_size
        self.asks = RedBlackTree(buffer[offset: offset + asks_size], OrderNode, size_params.asks_size)

    @staticmethod
    def calc_size(size_params: MarketSizeParams) -> int:
        return (
            FifoMarketHeader.calc_size()
            + RedBlackTree.calc_size(OrderNode, size_params.bids_size)
            + RedBlackTree.calc_size(OrderNode, size_params.asks_size)
            + RedBlackTree.calc_size(TraderNode, size_params.num_seats)
        )

    @property
    def taker_fee_bps(self) -> int:
        return self.header.taker_fee_bps

    @property
    def base_lots_per_base_unit(self) -> int:
        return self.header.base_lots_per_base_unit

    @property
    def tick_size_in_quote_lots_per_base_unit(self) -> int:
        return self.header.tick_size_in_quote_lots_per_base_unit

    def get_ladder(
            self,
            levels: int,
            current_slot: Optional[int] = None,
            current_unix_timestamp: Optional[int] = None,
    ) -> Ladder:
        return Ladder(
            bids=self._get_levels(self.bids, levels, current_slot, current_unix_timestamp),
            asks=self._get_levels(self.asks, levels, current_slot, current_unix_timestamp),
        )

    @staticmethod
    def _get_levels(tree, levels, current_slot, current_unix_timestamp) -> List[LadderOrder]:
        book = []
        if levels <= 0:
            return book
        for node in tree.iter_nodes():
            price_in_ticks = node.key.price_in_ticks
            size_in_base_lots = node.value.num_base_lots
            if price_in_ticks == 0 or size_in_base_lots == 0:
                continue
            if node.value.is_expired(current_slot, current_unix_timestamp):
                continue
            if book and book[-1].price_in_ticks == price_in_ticks:
                book[-1] = LadderOrder(price_in_ticks, book[-1].size_in_base_lots + size_in_base_lots)
                continue
            if len(book) == levels:
                break
            book.append(LadderOrder(price_in_ticks, size_in_base_lots))
        return book
