from podite import (
    FixedLenArray,
    U32,
    U64,
    U8,
    pod,
)
from solders.pubkey import Pubkey


def to_pubkey(raw) -> Pubkey:
    return Pubkey(bytes(raw))


def from_pubkey(key: Pubkey):
    return list(bytes(key))


@pod
class MarketSizeParams:
    bids_size: U64
    asks_size: U64
    num_seats: U64

    def as_tuple(self):
        return self.bids_size, self.asks_size, self.num_seats


@pod
class TokenParams:
    decimals: U32
    vault_bump: U32
    mint_key: FixedLenArray[U8, 32]
    vault_key: FixedLenArray[U8, 32]

    @property
    def mint(self) -> Pubkey:
        return to_pubkey(self.mint_key)

    @property
    def vault(self) -> Pubkey:
        return to_pubkey(self.vault_key)


@pod
class MarketHeader:
    discriminant: U64
    status: U64
    market_size_params: MarketSizeParams
    base_params: TokenParams
    base_lot_size: U64
    quote_params: TokenParams
    quote_lot_size: U64
    tick_size_in_quote_atoms_per_base_unit: U64
    authority: FixedLenArray[U8, 32]
    fee_recipient: FixedLenArray[U8, 32]
    market_sequence_number: U64
    successor: FixedLenArray[U8, 32]
    raw_base_units_per_base_unit: U32
    padding1: U32
    padding2: FixedLenArray[U64, 32]

    @classmethod
    def to_bytes(cls, obj, **kwargs):
        return cls.pack(obj, converter="bytes", **kwargs)

    @classmethod
    def from_bytes(cls, raw, **kwargs):
        return cls.unpack(raw, converter="bytes", **kwargs)

    @property
    def base_mint(self) -> Pubkey:
        return self.base_params.mint

    @property
    def quote_mint(self) -> Pubkey:
        return self.quote_params.mint
