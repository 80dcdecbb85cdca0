import argparse
import logging

from solders.pubkey import Pubkey

from jupiter_phoenix.amm import QuoteParams
from jupiter_phoenix.jupiter import JupiterPhoenix
from jupiter_phoenix.utils.solana import client_for, fetch_accounts_map, fetch_keyed_account


def main():
    ap = argparse.ArgumentParser(description="Quote a round trip against a live Phoenix market")
    ap.add_argument("market")
    ap.add_argument("--network", default="devnet")
    ap.add_argument("--in-amount", type=int, default=1_000_000_000_000, help="base atoms to sell")
    ap.add_argument("--levels", type=int, default=5, help="levels per side to print")
    ap.add_argument("--use-clock", action="store_true", help="skip expired orders")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    client = client_for(args.network)
    market_key = Pubkey.from_string(args.market)
    phoenix = JupiterPhoenix.new_from_keyed_account(
        fetch_keyed_account(market_key, client),
        use_clock=args.use_clock,
    )
    phoenix.update(fetch_accounts_map(phoenix.get_accounts_to_update(), client))

    print(phoenix.ladder.to_frame(phoenix.metadata, args.levels).to_string(index=False))

    base_scale = 10 ** phoenix.get_base_decimals()
    quote_scale = 10 ** phoenix.get_quote_decimals()

    print(f"\nGetting quote for selling {args.in_amount / base_scale} base")
    sell = phoenix.quote(QuoteParams(args.in_amount, phoenix.base_mint, phoenix.quote_mint))
    print(f"Quote result: {sell.out_amount / quote_scale}")

    print(f"Getting quote for buying base with {sell.out_amount / quote_scale} quote")
    buy = phoenix.quote(QuoteParams(sell.out_amount, phoenix.quote_mint, phoenix.base_mint))
    print(f"Quote result: {buy.out_amount / base_scale}")


if __name__ == "__main__":
    main()
