class PhoenixError(ValueError):
    pass


class HeaderDecodeError(PhoenixError):
    """Account data too short or malformed for the fixed market header."""


class InvalidMarketMetadata(HeaderDecodeError):
    """Header decoded but its lot sizes, tick size or fee are unusable."""


class MarketBodyDecodeError(PhoenixError):
    pass


class ClockDecodeError(MarketBodyDecodeError):
    """Clock sysvar data too short to decode."""


class UnsupportedLayout(PhoenixError):
    def __init__(self, bids_size, asks_size, num_seats):
        super().__init__(
            f"market configuration not found: bids_size={bids_size} "
            f"asks_size={asks_size} num_seats={num_seats}"
        )
        self.bids_size = bids_size
        self.asks_size = asks_size
        self.num_seats = num_seats


class InvalidMintPair(PhoenixError):
    def __init__(self, input_mint, output_mint):
        super().__init__(f"Invalid mint pair: {input_mint} -> {output_mint}")
        self.input_mint = input_mint
        self.output_mint = output_mint


class ArithmeticOverflow(PhoenixError):
    pass


class MissingAccountError(PhoenixError):
    def __init__(self, key):
        super().__init__(f"Missing account data for {key}")
        self.key = key
