"""
Block explorer links for transactions and accounts.
"""

from dataclasses import dataclass
from urllib.parse import quote, urlencode


@dataclass(frozen=True)
class ExplorerLinks:
    """Builds explorer URLs, e.g. https://explorer.aptoslabs.com/txn/0xabc?network=devnet"""

    base_url: str = "https://explorer.aptoslabs.com"
    network: str = "devnet"

    def transaction_url(self, tx_hash: str) -> str:
        return self._url("txn", tx_hash)

    def account_url(self, public_key: str) -> str:
        return self._url("account", public_key)

    def _url(self, section: str, ident: str) -> str:
        base = self.base_url.rstrip("/")
        query = urlencode({"network": self.network})
        return f"{base}/{section}/{quote(ident, safe='')}?{query}"
