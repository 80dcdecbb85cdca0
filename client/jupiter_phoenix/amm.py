from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from podite import U8, Enum, pod
from solders.instruction import AccountMeta
from solders.pubkey import Pubkey


@pod
class Side(Enum[U8]):
    BID = None
    ASK = None


@dataclass
class KeyedAccount:
    key: Pubkey
    data: bytes
    params: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class QuoteParams:
    in_amount: int
    input_mint: Pubkey
    output_mint: Pubkey


@dataclass
class Quote:
    in_amount: int = 0
    out_amount: int = 0
    fee_amount: int = 0
    fee_mint: Optional[Pubkey] = None
    fee_pct: Decimal = Decimal(0)
    not_enough_liquidity: bool = False


@dataclass(frozen=True)
class SwapParams:
    source_mint: Pubkey
    destination_mint: Pubkey
    user_source_token_account: Pubkey
    user_destination_token_account: Pubkey
    user_transfer_authority: Pubkey
    in_amount: int = 0


@dataclass(frozen=True)
class SwapLeg:
    side: Side


@dataclass
class SwapLegAndAccountMetas:
    swap_leg: SwapLeg
    account_metas: List[AccountMeta] = field(default_factory=list)


class Amm(ABC):
    """What the router needs from a venue, and nothing more."""

    @abstractmethod
    def label(self) -> str:
        ...

    @abstractmethod
    def key(self) -> Pubkey:
        ...

    @abstractmethod
    def get_reserve_mints(self) -> List[Pubkey]:
        ...

    @abstractmethod
    def get_accounts_to_update(self) -> List[Pubkey]:
        ...

    @abstractmethod
    def update(self, accounts_map: Mapping[Pubkey, bytes]) -> None:
        ...

    @abstractmethod
    def quote(self, quote_params: QuoteParams) -> Quote:
        ...

    @abstractmethod
    def get_swap_leg_and_account_metas(self, swap_params: SwapParams) -> SwapLegAndAccountMetas:
        ...

    @abstractmethod
    def clone_amm(self) -> "Amm":
        ...
