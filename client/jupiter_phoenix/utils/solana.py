from typing import Dict, Iterable, Optional

from solana.rpc.api import Client
from solana.rpc.commitment import Confirmed
from solders.pubkey import Pubkey

from jupiter_phoenix.amm import KeyedAccount
from jupiter_phoenix.errors import MissingAccountError

URLS = {
    "devnet": "https://api.devnet.solana.com",
    "dev": "https://api.devnet.solana.com",
    "localnet": "http://localhost:8899/",
    "local": "http://localhost:8899/",
    "mainnet": "https://api.mainnet-beta.solana.com/",
    "mainnet-beta": "https://api.mainnet-beta.solana.com/",
}


class Context:
    client: Optional[Client] = None

    @staticmethod
    def get_global_client():
        return Context.client

    @staticmethod
    def set_global_client(client):
        Context.client = client


def client_for(network: str) -> Client:
    return Client(URLS.get(network, network))


def fetch_keyed_account(key: Pubkey, client=None) -> KeyedAccount:
    if client is None:
        client = Context.get_global_client()

    account = client.get_account_info(key, commitment=Confirmed).value
    if account is None:
        raise MissingAccountError(key)
    return KeyedAccount(key=key, data=bytes(account.data))


def fetch_accounts_map(keys: Iterable[Pubkey], client=None) -> Dict[Pubkey, bytes]:
    """Fresh data for `keys`; accounts that do not exist are left out of the map."""
    if client is None:
        client = Context.get_global_client()

    keys = list(keys)
    accounts = client.get_multiple_accounts(keys, commitment=Confirmed).value
    return {
        key: bytes(account.data)
        for key, account in zip(keys, accounts)
        if account is not None
    }
