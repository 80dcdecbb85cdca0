from types import SimpleNamespace

import pytest

from builders import SOL_MINT, SOL_USDC_MARKET, USDC_MINT, encode_market
from jupiter_phoenix.errors import MissingAccountError
from jupiter_phoenix.jupiter import JupiterPhoenix
from jupiter_phoenix.utils.solana import Context, fetch_accounts_map, fetch_keyed_account


class FakeClient:
    """Answers account lookups from a dict, shaped like solana-py responses."""

    def __init__(self, accounts):
        self.accounts = accounts

    def _account(self, key):
        data = self.accounts.get(key)
        return None if data is None else SimpleNamespace(data=data)

    def get_account_info(self, key, commitment=None):
        return SimpleNamespace(value=self._account(key))

    def get_multiple_accounts(self, keys, commitment=None):
        return SimpleNamespace(value=[self._account(k) for k in keys])


def test_fetch_keyed_account_builds_adapter():
    client = FakeClient({SOL_USDC_MARKET: encode_market()})
    account = fetch_keyed_account(SOL_USDC_MARKET, client)
    assert account.key == SOL_USDC_MARKET
    phoenix = JupiterPhoenix.new_from_keyed_account(account)
    assert phoenix.get_reserve_mints() == [SOL_MINT, USDC_MINT]


def test_fetch_keyed_account_missing():
    with pytest.raises(MissingAccountError):
        fetch_keyed_account(SOL_USDC_MARKET, FakeClient({}))


def test_fetch_accounts_map_skips_missing_accounts():
    data = encode_market()
    client = FakeClient({SOL_USDC_MARKET: data})
    assert fetch_accounts_map([SOL_USDC_MARKET, SOL_MINT], client) == {SOL_USDC_MARKET: data}


def test_global_client_is_used_by_default():
    old = Context.get_global_client()
    Context.set_global_client(FakeClient({SOL_MINT: b"\x01"}))
    try:
        assert fetch_accounts_map([SOL_MINT]) == {SOL_MINT: b"\x01"}
    finally:
        Context.set_global_client(old)
