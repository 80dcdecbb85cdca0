from dataclasses import dataclass
from typing import Iterable, Tuple

import pandas as pd


@dataclass(frozen=True)
class LadderOrder:
    price_in_ticks: int
    size_in_base_lots: int


@dataclass(frozen=True)
class Ladder:
    """Top-of-book snapshot: bids best (highest) first, asks best (lowest) first.

    Levels are aggregated per price and never empty. The snapshot is replaced
    as a whole on refresh, never patched.
    """

    bids: Tuple[LadderOrder, ...] = ()
    asks: Tuple[LadderOrder, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "bids", tuple(self.bids))
        object.__setattr__(self, "asks", tuple(self.asks))
        for side, levels, descending in (("bids", self.bids, True), ("asks", self.asks, False)):
            for level in levels:
                if level.price_in_ticks <= 0:
                    raise ValueError(f"{side} level has non-positive price: {level}")
                if level.size_in_base_lots <= 0:
                    raise ValueError(f"{side} level has non-positive size: {level}")
            for better, worse in zip(levels, levels[1:]):
                if descending and better.price_in_ticks < worse.price_in_ticks:
                    raise ValueError(f"{side} are not sorted best first: {better} before {worse}")
                if not descending and better.price_in_ticks > worse.price_in_ticks:
                    raise ValueError(f"{side} are not sorted best first: {better} before {worse}")

    @classmethod
    def from_levels(
            cls,
            bids: Iterable[Tuple[int, int]] = (),
            asks: Iterable[Tuple[int, int]] = (),
    ) -> "Ladder":
        return cls(
            bids=tuple(LadderOrder(p, s) for p, s in bids),
            asks=tuple(LadderOrder(p, s) for p, s in asks),
        )

    def is_empty(self) -> bool:
        return not self.bids and not self.asks

    def to_frame(self, metadata, levels: int = 5) -> pd.DataFrame:
        """Top `levels` of each side in display units, asks above bids."""
        raw_units = metadata.raw_base_units_per_base_unit or 1
        quote_atoms_per_tick = (
            metadata.tick_size_in_quote_lots_per_base_unit_per_tick * metadata.quote_lot_size
        )

        def row(side, level):
            return {
                "Side": side,
                "Price": level.price_in_ticks * quote_atoms_per_tick
                / 10 ** metadata.quote_decimals
                / raw_units,
                "Size": level.size_in_base_lots * metadata.base_lot_size
                / 10 ** metadata.base_decimals,
            }

        rows = [row("ask", a) for a in reversed(self.asks[:levels])]
        rows += [row("bid", b) for b in self.bids[:levels]]
        return pd.DataFrame(rows, columns=["Side", "Price", "Size"])
