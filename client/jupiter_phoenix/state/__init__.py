from .clock import Clock
from .header import MarketHeader, MarketSizeParams, TokenParams, from_pubkey, to_pubkey
from .market import (
    FifoMarket,
    FifoMarketHeader,
    FifoOrderId,
    FifoRestingOrder,
    OrderNode,
    TraderNode,
    TraderState,
)
from .red_black_tree import RedBlackTree, TreeHeader

__all__ = [
    "Clock",
    "FifoMarket",
    "FifoMarketHeader",
    "FifoOrderId",
    "FifoRestingOrder",
    "MarketHeader",
    "MarketSizeParams",
    "OrderNode",
    "RedBlackTree",
    "TokenParams",
    "TraderNode",
    "TraderState",
    "TreeHeader",
    "from_pubkey",
    "to_pubkey",
]
