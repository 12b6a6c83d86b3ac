"""Unit tests for the Account Registry, explorer links and the Credit Ledger."""

import random

import pytest

from src.kernel.accounts import AccountRegistry
from src.kernel.credits import PRICES, CreditLedger
from src.kernel.errors import InsufficientCreditsError
from src.kernel.explorer import ExplorerLinks
from src.kernel.types import OperationKind


def _active(registry: AccountRegistry):
    return [a for a in registry.accounts if a.is_active]


class TestAccountRegistry:
    """Tests for AccountRegistry."""

    def test_create_is_inactive_with_key_shape(self):
        registry = AccountRegistry()
        account = registry.create()
        assert account.is_active is False
        assert account.public_key.startswith("0x")
        assert len(account.public_key) == 42

    def test_set_active_single_winner(self):
        registry = AccountRegistry()
        a, b, c = registry.create(), registry.create(), registry.create()
        registry.set_active(a.public_key)
        registry.set_active(c.public_key)
        active = _active(registry)
        assert len(active) == 1
        assert active[0].public_key == c.public_key
        assert registry.active.public_key == c.public_key

    def test_unknown_key_leaves_none_active(self):
        registry = AccountRegistry()
        a = registry.create()
        registry.set_active(a.public_key)
        assert registry.set_active("0xdoesnotexist") is None
        assert _active(registry) == []
        assert len(registry) == 1

    def test_random_activation_sequences(self):
        """After any set_active(k): zero or one active, and it is k."""
        rng = random.Random(7)
        registry = AccountRegistry()
        keys = [registry.create().public_key for _ in range(5)]
        for _ in range(200):
            key = rng.choice(keys + ["0xunknown"])
            registry.set_active(key)
            active = _active(registry)
            assert len(active) <= 1
            if key in keys:
                assert [a.public_key for a in active] == [key]
            else:
                assert active == []


class TestExplorerLinks:
    def test_transaction_and_account_urls(self):
        links = ExplorerLinks(base_url="https://explorer.aptoslabs.com/", network="testnet")
        assert links.transaction_url("0xabc") == "https://explorer.aptoslabs.com/txn/0xabc?network=testnet"
        assert links.account_url("0x1") == "https://explorer.aptoslabs.com/account/0x1?network=testnet"


class TestCreditLedger:
    """Tests for CreditLedger."""

    def test_price_table(self):
        assert PRICES == {
            OperationKind.AUDIT: 100,
            OperationKind.COMPILE: 50,
            OperationKind.DEPLOY: 200,
            OperationKind.PROVE: 100,
        }

    def test_can_afford(self):
        ledger = CreditLedger(100)
        assert ledger.can_afford(100) is True
        assert ledger.can_afford(101) is False

    def test_debit_success(self):
        ledger = CreditLedger(1000)
        assert ledger.try_debit(50) is True
        assert ledger.balance == 950

    def test_failed_debit_leaves_balance(self):
        ledger = CreditLedger(30)
        assert ledger.try_debit(50) is False
        assert ledger.balance == 30

    def test_exact_balance_can_be_spent(self):
        ledger = CreditLedger(100)
        assert ledger.try_debit(100) is True
        assert ledger.balance == 0
        assert ledger.try_debit(1) is False

    def test_debit_raises_when_insufficient(self):
        ledger = CreditLedger(10)
        with pytest.raises(InsufficientCreditsError) as info:
            ledger.debit(50)
        assert info.value.balance == 10
        assert info.value.amount == 50
        assert ledger.balance == 10

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError):
            CreditLedger(-1)
        with pytest.raises(ValueError):
            CreditLedger(10).try_debit(-5)

    @pytest.mark.parametrize("seed", range(5))
    def test_random_debit_sequences_never_negative(self, seed):
        rng = random.Random(seed)
        ledger = CreditLedger(rng.randint(0, 500))
        for _ in range(100):
            before = ledger.balance
            amount = rng.choice(list(PRICES.values()) + [rng.randint(0, 300)])
            ok = ledger.try_debit(amount)
            assert ledger.balance >= 0
            if ok:
                assert ledger.balance == before - amount
            else:
                assert ledger.balance == before
