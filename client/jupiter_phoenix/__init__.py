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
from jupiter_phoenix.errors import (
    ArithmeticOverflow,
    ClockDecodeError,
    HeaderDecodeError,
    InvalidMarketMetadata,
    InvalidMintPair,
    MarketBodyDecodeError,
    MissingAccountError,
    PhoenixError,
    UnsupportedLayout,
)
from jupiter_phoenix.jupiter import JupiterPhoenix
from jupiter_phoenix.ladder import Ladder, LadderOrder
from jupiter_phoenix.metadata import MarketMetadata, load_market
from jupiter_phoenix.quote import quote, simulate
