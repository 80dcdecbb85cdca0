"""Ladder walk that turns an input amount into an output amount.

All arithmetic is on Python integers, so intermediate products never wrap;
only the amounts crossing the boundary are checked against the u64 range.

Two approximations are kept on purpose:

* a level that is touched is consumed whole: the remaining budget is reduced
  by the level's full size (or full cost) even when only part of it fits, so
  the walk can under-fill compared to the venue's matching engine;
* the taker fee is deducted from the output, while the venue charges it on
  the input side. Quotes are close, not exact.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

from solders.pubkey import Pubkey

from jupiter_phoenix.constants import BPS_DENOMINATOR, U64_MAX
from jupiter_phoenix.errors import ArithmeticOverflow, InvalidMintPair
from jupiter_phoenix.ladder import Ladder, LadderOrder
from jupiter_phoenix.metadata import MarketMetadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fill:
    in_amount: int
    # output before the taker fee is taken out
    gross_out_amount: int
    out_amount: int
    # lots of input budget left when the ladder ran out
    unfilled_lots: int

    @property
    def fee_amount(self) -> int:
        return self.gross_out_amount - self.out_amount

    @property
    def not_enough_liquidity(self) -> bool:
        return self.unfilled_lots > 0


def sell_base(metadata: MarketMetadata, bids: Iterable[LadderOrder], base_lot_budget: int) -> Tuple[int, int]:
    """Walk the bids with a budget of base lots, returning (quote atoms out, lots left)."""
    out_amount = 0
    for level in bids:
        if base_lot_budget == 0:
            break
        out_amount += (
            level.price_in_ticks
            * min(level.size_in_base_lots, base_lot_budget)
            * metadata.tick_size_in_quote_lots_per_base_unit_per_tick
            * metadata.quote_lot_size
            // metadata.base_lots_per_base_unit
        )
        base_lot_budget = max(base_lot_budget - level.size_in_base_lots, 0)
    return out_amount, base_lot_budget


def buy_base(metadata: MarketMetadata, asks: Iterable[LadderOrder], quote_lot_budget: int) -> Tuple[int, int]:
    """Walk the asks with a budget of quote lots, returning (base atoms out, lots left)."""
    tick_size = metadata.tick_size_in_quote_lots_per_base_unit_per_tick
    out_amount = 0
    for level in asks:
        if quote_lot_budget == 0:
            break
        level_cost_in_quote_lots = (
            level.price_in_ticks
            * level.size_in_base_lots
            * tick_size
            // metadata.base_lots_per_base_unit
        )
        affordable_base_lots = (
            quote_lot_budget
            * metadata.base_lots_per_base_unit
            // (tick_size * level.price_in_ticks)
        )
        out_amount += min(level.size_in_base_lots, affordable_base_lots) * metadata.base_lot_size
        quote_lot_budget = max(quote_lot_budget - level_cost_in_quote_lots, 0)
    return out_amount, quote_lot_budget


def apply_taker_fee(amount: int, taker_fee_bps: int) -> int:
    return amount * (BPS_DENOMINATOR - taker_fee_bps) // BPS_DENOMINATOR


def simulate(
        metadata: MarketMetadata,
        ladder: Ladder,
        input_mint: Pubkey,
        output_mint: Pubkey,
        input_amount: int,
) -> Fill:
    if not 0 <= input_amount <= U64_MAX:
        raise ArithmeticOverflow(f"input amount {input_amount} is outside the u64 range")

    if input_mint == metadata.base_asset_id and output_mint == metadata.quote_asset_id:
        gross, unfilled = sell_base(metadata, ladder.bids, input_amount // metadata.base_lot_size)
    elif input_mint == metadata.quote_asset_id and output_mint == metadata.base_asset_id:
        gross, unfilled = buy_base(metadata, ladder.asks, input_amount // metadata.quote_lot_size)
    else:
        raise InvalidMintPair(input_mint, output_mint)

    if gross > U64_MAX:
        raise ArithmeticOverflow(f"quote output {gross} does not fit in a u64")

    fill = Fill(
        in_amount=input_amount,
        gross_out_amount=gross,
        out_amount=apply_taker_fee(gross, metadata.taker_fee_bps),
        unfilled_lots=unfilled,
    )
    logger.debug(
        "quote %s: %s %s -> %s %s (fee %s, unfilled lots %s)",
        metadata.market_id, input_amount, input_mint, fill.out_amount, output_mint,
        fill.fee_amount, fill.unfilled_lots,
    )
    return fill


def quote(
        metadata: MarketMetadata,
        ladder: Ladder,
        input_mint: Pubkey,
        output_mint: Pubkey,
        input_amount: int,
) -> int:
    return simulate(metadata, ladder, input_mint, output_mint, input_amount).out_amount
