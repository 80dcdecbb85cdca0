import copy
import logging
import threading
from decimal import Decimal
from typing import List, Mapping

from solders.instruction import AccountMeta
from solders.pubkey import Pubkey

from jupiter_phoenix import program_ids as pids
from jupiter_phoenix.addrs import get_log_authority, get_vault_address
from jupiter_phoenix.amm import (
    Amm,
    KeyedAccount,
    Quote,
    QuoteParams,
    Side,
    SwapLeg,
    SwapLegAndAccountMetas,
    SwapParams,
)
from jupiter_phoenix.constants import BPS_DENOMINATOR, LABEL, LADDER_LEVELS
from jupiter_phoenix.errors import HeaderDecodeError, InvalidMintPair, MissingAccountError
from jupiter_phoenix.ladder import Ladder
from jupiter_phoenix.metadata import MarketMetadata, load_market
from jupiter_phoenix.quote import simulate
from jupiter_phoenix.state import Clock

logger = logging.getLogger(__name__)


class JupiterPhoenix(Amm):
    """Phoenix market exposed to the Jupiter router.

    Market metadata is decoded once; the ladder is rebuilt from fresh account
    bytes on every `update` and swapped in whole under a lock, so a concurrent
    `quote` sees either the old ladder or the new one.
    """

    def __init__(
            self,
            metadata: MarketMetadata,
            ladder: Ladder,
            label: str = LABEL,
            program_id: Pubkey = pids.PHOENIX_PROGRAM_ID,
            ladder_levels: int = LADDER_LEVELS,
            use_clock: bool = False,
    ):
        self.metadata = metadata
        self.program_id = program_id
        self.ladder_levels = ladder_levels
        self.use_clock = use_clock
        self._label = label
        self._ladder = ladder
        self._lock = threading.Lock()

    @classmethod
    def new_from_keyed_account(
            cls,
            keyed_account: KeyedAccount,
            ladder_levels: int = LADDER_LEVELS,
            use_clock: bool = False,
            **kwargs,
    ) -> "JupiterPhoenix":
        header, market = load_market(keyed_account.data)
        metadata = MarketMetadata.from_market(keyed_account.key, header, market)
        return cls(
            metadata,
            market.get_ladder(ladder_levels),
            ladder_levels=ladder_levels,
            use_clock=use_clock,
            **kwargs,
        )

    @property
    def ladder(self) -> Ladder:
        with self._lock:
            return self._ladder

    @property
    def base_mint(self) -> Pubkey:
        return self.metadata.base_asset_id

    @property
    def quote_mint(self) -> Pubkey:
        return self.metadata.quote_asset_id

    def get_base_decimals(self) -> int:
        return self.metadata.base_decimals

    def get_quote_decimals(self) -> int:
        return self.metadata.quote_decimals

    def label(self) -> str:
        return self._label

    def key(self) -> Pubkey:
        return self.metadata.market_id

    def get_reserve_mints(self) -> List[Pubkey]:
        return [self.base_mint, self.quote_mint]

    def get_accounts_to_update(self) -> List[Pubkey]:
        if self.use_clock:
            return [self.metadata.market_id, pids.CLOCK_PROGRAM_ID]
        return [self.metadata.market_id]

    def update(self, accounts_map: Mapping[Pubkey, bytes]) -> None:
        market_data = accounts_map.get(self.metadata.market_id)
        if market_data is None:
            raise MissingAccountError(self.metadata.market_id)

        current_slot = current_unix_timestamp = None
        if self.use_clock:
            clock_data = accounts_map.get(pids.CLOCK_PROGRAM_ID)
            if clock_data is None:
                raise MissingAccountError(pids.CLOCK_PROGRAM_ID)
            clock = Clock.from_bytes(clock_data)
            current_slot, current_unix_timestamp = clock.slot, clock.unix_timestamp

        header, market = load_market(market_data)
        if (header.base_mint, header.quote_mint) != self.metadata.mints:
            raise HeaderDecodeError(
                f"market {self.metadata.market_id} now trades "
                f"{header.base_mint}/{header.quote_mint}"
            )
        ladder = market.get_ladder(self.ladder_levels, current_slot, current_unix_timestamp)
        with self._lock:
            self._ladder = ladder
        logger.debug(
            "refreshed %s: %d bid levels, %d ask levels",
            self.metadata.market_id, len(ladder.bids), len(ladder.asks),
        )

    def quote(self, quote_params: QuoteParams) -> Quote:
        ladder = self.ladder
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s top of book:\n%s", self.metadata.market_id, ladder.to_frame(self.metadata))

        fill = simulate(
            self.metadata,
            ladder,
            quote_params.input_mint,
            quote_params.output_mint,
            quote_params.in_amount,
        )
        return Quote(
            in_amount=fill.in_amount,
            out_amount=fill.out_amount,
            fee_amount=fill.fee_amount,
            fee_mint=quote_params.output_mint,
            fee_pct=Decimal(self.metadata.taker_fee_bps) / BPS_DENOMINATOR,
            not_enough_liquidity=fill.not_enough_liquidity,
        )

    def get_swap_leg_and_account_metas(self, swap_params: SwapParams) -> SwapLegAndAccountMetas:
        if swap_params.source_mint == self.base_mint:
            if swap_params.destination_mint != self.quote_mint:
                raise InvalidMintPair(swap_params.source_mint, swap_params.destination_mint)
            side = Side.ASK
            base_account = swap_params.user_source_token_account
            quote_account = swap_params.user_destination_token_account
        else:
            if swap_params.source_mint != self.quote_mint or swap_params.destination_mint != self.base_mint:
                raise InvalidMintPair(swap_params.source_mint, swap_params.destination_mint)
            side = Side.BID
            base_account = swap_params.user_destination_token_account
            quote_account = swap_params.user_source_token_account

        market_key = self.metadata.market_id
        account_metas = [
            AccountMeta(pubkey=market_key, is_signer=False, is_writable=True),
            AccountMeta(pubkey=swap_params.user_transfer_authority, is_signer=True, is_writable=True),
            AccountMeta(pubkey=get_log_authority(self.program_id), is_signer=False, is_writable=False),
            AccountMeta(pubkey=self.program_id, is_signer=False, is_writable=False),
            AccountMeta(pubkey=base_account, is_signer=False, is_writable=True),
            AccountMeta(pubkey=quote_account, is_signer=False, is_writable=True),
            AccountMeta(
                pubkey=get_vault_address(market_key, self.base_mint, self.program_id),
                is_signer=False,
                is_writable=True,
            ),
            AccountMeta(
                pubkey=get_vault_address(market_key, self.quote_mint, self.program_id),
                is_signer=False,
                is_writable=True,
            ),
            AccountMeta(pubkey=pids.SPL_TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        ]
        return SwapLegAndAccountMetas(swap_leg=SwapLeg(side=side), account_metas=account_metas)

    def clone_amm(self) -> "JupiterPhoenix":
        return copy.deepcopy(self)

    def __deepcopy__(self, memo):
        return JupiterPhoenix(
            self.metadata,
            copy.deepcopy(self.ladder, memo),
            label=self._label,
            program_id=self.program_id,
            ladder_levels=self.ladder_levels,
            use_clock=self.use_clock,
        )
