import pytest

from builders import ASKS, BIDS, SOL_MINT, SOL_USDC_MARKET, USDC_MINT, encode_market, orders_from_levels
from jupiter_phoenix.amm import KeyedAccount
from jupiter_phoenix.jupiter import JupiterPhoenix
from jupiter_phoenix.ladder import Ladder
from jupiter_phoenix.metadata import MarketMetadata


@pytest.fixture
def metadata():
    return MarketMetadata(
        market_id=SOL_USDC_MARKET,
        base_asset_id=SOL_MINT,
        quote_asset_id=USDC_MINT,
        base_decimals=9,
        quote_decimals=6,
        base_lot_size=1_000_000,
        quote_lot_size=1,
        base_lots_per_base_unit=1000,
        tick_size_in_quote_lots_per_base_unit_per_tick=1000,
        taker_fee_bps=0,
    )


@pytest.fixture
def ladder():
    return Ladder.from_levels(bids=BIDS, asks=ASKS)


@pytest.fixture
def market_data():
    return encode_market(
        bids=orders_from_levels(BIDS),
        asks=orders_from_levels(ASKS, start_sequence=100),
        taker_fee_bps=2,
    )


@pytest.fixture
def phoenix(market_data):
    return JupiterPhoenix.new_from_keyed_account(KeyedAccount(key=SOL_USDC_MARKET, data=market_data))
