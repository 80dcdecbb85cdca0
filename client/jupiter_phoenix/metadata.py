import logging
from dataclasses import dataclass
from typing import Tuple

from solders.pubkey import Pubkey

from jupiter_phoenix.constants import BPS_DENOMINATOR
from jupiter_phoenix.dispatch import load_with_dispatch
from jupiter_phoenix.errors import HeaderDecodeError, InvalidMarketMetadata
from jupiter_phoenix.state import FifoMarket, MarketHeader

logger = logging.getLogger(__name__)

MARKET_HEADER_SIZE = MarketHeader.calc_size()


def split_market_data(data: bytes) -> Tuple[MarketHeader, bytes]:
    if len(data) < MARKET_HEADER_SIZE:
        raise HeaderDecodeError(
            f"account data is {len(data)} bytes, market header needs {MARKET_HEADER_SIZE}"
        )
    header_bytes, body = data[:MARKET_HEADER_SIZE], data[MARKET_HEADER_SIZE:]
    try:
        header = MarketHeader.from_bytes(header_bytes)
    except Exception as e:
        raise HeaderDecodeError(f"Failed to decode market header: {e}") from e
    return header, body


def load_market(data: bytes) -> Tuple[MarketHeader, FifoMarket]:
    header, body = split_market_data(bytes(data))
    return header, load_with_dispatch(header.market_size_params, body)


@dataclass(frozen=True)
class MarketMetadata:
    market_id: Pubkey
    base_asset_id: Pubkey
    quote_asset_id: Pubkey
    # display precision only, never used in lot math
    base_decimals: int
    quote_decimals: int
    base_lot_size: int
    quote_lot_size: int
    base_lots_per_base_unit: int
    tick_size_in_quote_lots_per_base_unit_per_tick: int
    taker_fee_bps: int
    raw_base_units_per_base_unit: int = 1

    def __post_init__(self):
        for name in (
                "base_lot_size",
                "quote_lot_size",
                "base_lots_per_base_unit",
                "tick_size_in_quote_lots_per_base_unit_per_tick",
        ):
            if getattr(self, name) <= 0:
                raise InvalidMarketMetadata(f"{name} must be positive, got {getattr(self, name)}")
        if not 0 <= self.taker_fee_bps < BPS_DENOMINATOR:
            raise InvalidMarketMetadata(f"taker_fee_bps out of range: {self.taker_fee_bps}")

    @classmethod
    def from_market(cls, market_id: Pubkey, header: MarketHeader, market: FifoMarket) -> "MarketMetadata":
        quote_lot_size = header.quote_lot_size
        tick_size = header.tick_size_in_quote_atoms_per_base_unit
        if quote_lot_size == 0:
            raise InvalidMarketMetadata("quote_lot_size must be positive, got 0")
        if tick_size % quote_lot_size != 0:
            raise InvalidMarketMetadata(
                f"tick size {tick_size} is not a multiple of quote lot size {quote_lot_size}"
            )
        logger.debug(
            "market %s: base_lot_size=%s quote_lot_size=%s taker_fee_bps=%s",
            market_id, header.base_lot_size, quote_lot_size, market.taker_fee_bps,
        )
        return cls(
            market_id=market_id,
            base_asset_id=header.base_mint,
            quote_asset_id=header.quote_mint,
            base_decimals=header.base_params.decimals,
            quote_decimals=header.quote_params.decimals,
            base_lot_size=header.base_lot_size,
            quote_lot_size=quote_lot_size,
            base_lots_per_base_unit=market.base_lots_per_base_unit,
            tick_size_in_quote_lots_per_base_unit_per_tick=tick_size // quote_lot_size,
            taker_fee_bps=market.taker_fee_bps,
            raw_base_units_per_base_unit=header.raw_base_units_per_base_unit or 1,
        )

    @classmethod
    def from_bytes(cls, market_id: Pubkey, data: bytes) -> "MarketMetadata":
        header, market = load_market(data)
        return cls.from_market(market_id, header, market)

    @property
    def tick_size_in_quote_atoms_per_base_unit(self) -> int:
        return self.tick_size_in_quote_lots_per_base_unit_per_tick * self.quote_lot_size

    @property
    def mints(self) -> Tuple[Pubkey, Pubkey]:
        return self.base_asset_id, self.quote_asset_id
