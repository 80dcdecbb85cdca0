from enum import Enum

from jupiter_phoenix.errors import UnsupportedLayout
from jupiter_phoenix.state import FifoMarket, MarketSizeParams


class MarketLayout(Enum):
    """Every (bids_size, asks_size, num_seats) the program has deployed."""

    BOOK_512_SEATS_128 = (512, 512, 128)
    BOOK_512_SEATS_1025 = (512, 512, 1025)
    BOOK_512_SEATS_1153 = (512, 512, 1153)
    BOOK_1024_SEATS_128 = (1024, 1024, 128)
    BOOK_1024_SEATS_2049 = (1024, 1024, 2049)
    BOOK_1024_SEATS_2177 = (1024, 1024, 2177)
    BOOK_2048_SEATS_128 = (2048, 2048, 128)
    BOOK_2048_SEATS_4097 = (2048, 2048, 4097)
    BOOK_2048_SEATS_4225 = (2048, 2048, 4225)
    BOOK_4096_SEATS_128 = (4096, 4096, 128)
    BOOK_4096_SEATS_8193 = (4096, 4096, 8193)
    BOOK_4096_SEATS_8321 = (4096, 4096, 8321)

    @property
    def size_params(self) -> MarketSizeParams:
        bids_size, asks_size, num_seats = self.value
        return MarketSizeParams(bids_size=bids_size, asks_size=asks_size, num_seats=num_seats)

    @property
    def body_size(self) -> int:
        return FifoMarket.calc_size(self.size_params)


def get_layout(size_params: MarketSizeParams) -> MarketLayout:
    try:
        return MarketLayout(size_params.as_tuple())
    except ValueError:
        raise UnsupportedLayout(*size_params.as_tuple()) from None


def load_with_dispatch(size_params: MarketSizeParams, data: bytes) -> FifoMarket:
    layout = get_layout(size_params)
    return FifoMarket(layout.size_params, data[: layout.body_size])
