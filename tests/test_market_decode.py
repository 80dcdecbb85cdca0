import pytest

from builders import (
    Order,
    SOL_MINT,
    SOL_USDC_MARKET,
    USDC_MINT,
    encode_header,
    encode_market,
    encode_order_tree,
    orders_from_levels,
)
from jupiter_phoenix.dispatch import MarketLayout, get_layout, load_with_dispatch
from jupiter_phoenix.errors import (
    HeaderDecodeError,
    InvalidMarketMetadata,
    MarketBodyDecodeError,
    UnsupportedLayout,
)
from jupiter_phoenix.metadata import MARKET_HEADER_SIZE, MarketMetadata, load_market
from jupiter_phoenix.state import (
    FifoMarket,
    FifoMarketHeader,
    MarketHeader,
    MarketSizeParams,
    OrderNode,
    RedBlackTree,
    TreeHeader,
)
from jupiter_phoenix.state.red_black_tree import SENTINEL


def test_layout_sizes_match_program():
    assert MarketHeader.calc_size() == 576
    assert TreeHeader.calc_size() == 32
    assert OrderNode.calc_size() == 64
    assert FifoMarketHeader.calc_size() == 304


def test_header_round_trip():
    size_params = MarketLayout.BOOK_1024_SEATS_2049.size_params
    header = MarketHeader.from_bytes(
        encode_header(size_params, base_lot_size=1_000, quote_lot_size=10, tick_size_in_quote_atoms_per_base_unit=5_000)
    )
    assert header.market_size_params.as_tuple() == (1024, 1024, 2049)
    assert header.base_mint == SOL_MINT
    assert header.quote_mint == USDC_MINT
    assert header.base_params.decimals == 9
    assert header.quote_params.decimals == 6
    assert header.base_lot_size == 1_000
    assert header.quote_lot_size == 10
    assert header.tick_size_in_quote_atoms_per_base_unit % header.quote_lot_size == 0


@pytest.mark.parametrize("layout", list(MarketLayout))
def test_every_known_layout_dispatches(layout):
    assert get_layout(layout.size_params) is layout


@pytest.mark.parametrize("size", [(0, 0, 0), (512, 512, 129), (512, 1024, 128), (8192, 8192, 128)])
def test_unknown_layout_is_rejected(size):
    bids_size, asks_size, num_seats = size
    size_params = MarketSizeParams(bids_size=bids_size, asks_size=asks_size, num_seats=num_seats)
    with pytest.raises(UnsupportedLayout) as e:
        load_with_dispatch(size_params, bytes(100_000))
    assert (e.value.bids_size, e.value.asks_size, e.value.num_seats) == size


def test_unknown_layout_fails_market_construction():
    size_params = MarketSizeParams(bids_size=7, asks_size=7, num_seats=7)
    data = encode_header(size_params) + bytes(10_000)
    with pytest.raises(UnsupportedLayout):
        MarketMetadata.from_bytes(SOL_USDC_MARKET, data)


def test_short_body_is_rejected():
    data = encode_market()
    with pytest.raises(MarketBodyDecodeError):
        load_market(data[:-1])


@pytest.mark.parametrize("length", [0, 1, MARKET_HEADER_SIZE - 1])
def test_short_header_is_rejected(length):
    with pytest.raises(HeaderDecodeError):
        load_market(encode_market()[:length])


def test_metadata_from_bytes():
    data = encode_market(
        base_lots_per_base_unit=1000,
        taker_fee_bps=2,
        quote_lot_size=10,
        tick_size_in_quote_atoms_per_base_unit=10_000,
    )
    metadata = MarketMetadata.from_bytes(SOL_USDC_MARKET, data)
    assert metadata.market_id == SOL_USDC_MARKET
    assert metadata.mints == (SOL_MINT, USDC_MINT)
    assert metadata.base_lot_size == 1_000_000
    assert metadata.quote_lot_size == 10
    assert metadata.base_lots_per_base_unit == 1000
    assert metadata.tick_size_in_quote_lots_per_base_unit_per_tick == 1_000
    assert metadata.tick_size_in_quote_atoms_per_base_unit == 10_000
    assert metadata.taker_fee_bps == 2


def test_tick_size_must_be_multiple_of_quote_lot_size():
    data = encode_market(quote_lot_size=3, tick_size_in_quote_atoms_per_base_unit=1000)
    with pytest.raises(InvalidMarketMetadata):
        MarketMetadata.from_bytes(SOL_USDC_MARKET, data)


@pytest.mark.parametrize("kwargs", [
    dict(base_lot_size=0),
    dict(quote_lot_size=0),
    dict(base_lots_per_base_unit=0),
    dict(tick_size_in_quote_atoms_per_base_unit=0, quote_lot_size=1),
    dict(taker_fee_bps=10_000),
])
def test_unusable_market_parameters_are_rejected(kwargs):
    with pytest.raises(InvalidMarketMetadata):
        MarketMetadata.from_bytes(SOL_USDC_MARKET, encode_market(**kwargs))


def test_invalid_metadata_is_a_header_error():
    assert issubclass(InvalidMarketMetadata, HeaderDecodeError)


def test_tree_traversal_order():
    orders = orders_from_levels([(5, 1), (1, 1), (3, 1), (4, 1), (2, 1)])
    tree = RedBlackTree(encode_order_tree(orders, 16), OrderNode, 16)
    assert len(tree) == 5
    assert [n.key.price_in_ticks for n in tree.iter_nodes()] == [1, 2, 3, 4, 5]


def test_bid_tree_is_keyed_best_price_first():
    orders = [Order(99, 1, 1), Order(101, 2, 2), Order(100, 3, 3), Order(101, 4, 4)]
    tree = RedBlackTree(encode_order_tree(orders, 16, bids=True), OrderNode, 16)
    assert [(n.key.price_in_ticks, n.key.order_sequence_number) for n in tree.iter_nodes()] == [
        (101, 2),
        (101, 4),
        (100, 3),
        (99, 1),
    ]


def test_market_with_several_bid_prices_decodes_best_first():
    data = encode_market(bids=orders_from_levels([(99, 1), (100, 2), (101, 3)]))
    _, market = load_market(data)
    assert [n.key.price_in_ticks for n in market.bids.iter_nodes()] == [101, 100, 99]
    ladder = market.get_ladder(128)
    assert [b.price_in_ticks for b in ladder.bids] == [101, 100, 99]
    assert ladder.bids[0].size_in_base_lots == 3


def test_empty_tree_yields_nothing():
    tree = RedBlackTree(encode_order_tree([], 8), OrderNode, 8)
    assert tree.root == SENTINEL
    assert list(tree.iter_nodes()) == []


def test_tree_with_cycle_is_rejected():
    data = bytearray(encode_order_tree([Order(1, 1, 1)], 4))
    node_start = TreeHeader.calc_size()
    # point the single node's right child back at itself
    data[node_start + 4: node_start + 8] = (1).to_bytes(4, "little")
    tree = RedBlackTree(bytes(data), OrderNode, 4)
    with pytest.raises(MarketBodyDecodeError):
        list(tree.iter_nodes())


def test_tree_with_out_of_range_child_is_rejected():
    data = bytearray(encode_order_tree([Order(1, 1, 1)], 4))
    node_start = TreeHeader.calc_size()
    data[node_start: node_start + 4] = (9).to_bytes(4, "little")
    tree = RedBlackTree(bytes(data), OrderNode, 4)
    with pytest.raises(MarketBodyDecodeError):
        list(tree.iter_nodes())


def test_market_body_accessors():
    header, market = load_market(encode_market(base_lots_per_base_unit=100, taker_fee_bps=5))
    assert isinstance(market, FifoMarket)
    assert market.size_params.as_tuple() == (512, 512, 128)
    assert market.base_lots_per_base_unit == 100
    assert market.taker_fee_bps == 5
    assert market.tick_size_in_quote_lots_per_base_unit == 1000
    assert header.market_size_params.as_tuple() == (512, 512, 128)
