import os
import tempfile

# keep log files out of the working tree; must run before solfaucet is imported
os.environ.setdefault("FAUCET_LOG_DIR", tempfile.mkdtemp(prefix="solfaucet-logs-"))
os.environ.setdefault("FAUCET_CONFIG", os.path.join(tempfile.gettempdir(), "solfaucet-missing.json"))

import pytest
from solders.keypair import Keypair

from solfaucet.defense.balance_gate import BalanceGate
from solfaucet.defense.cooldown_ledger import CooldownLedger
from solfaucet.exec.claim_orchestrator import ClaimOrchestrator
from solfaucet.exec.transfer_dispatcher import TransferDispatcher
from solfaucet.inputs.wallet.wallet_core import FaucetAccount
from solfaucet.memory.claim_stats import ClaimStats


@pytest.fixture
def account():
    return FaucetAccount(Keypair())


@pytest.fixture
def make_orchestrator(account):
    def _make(client, *, claim_amount=0.01, fee_reserve=0.001, cooldown_hours=24,
              confirm_timeout=5.0, clock=None, faucet_account=account, recent_cap=50):
        kwargs = {"claim_amount": claim_amount, "fee_reserve": fee_reserve}
        if clock is not None:
            kwargs["clock"] = clock
        return ClaimOrchestrator(
            faucet_account,
            CooldownLedger(cooldown_hours),
            BalanceGate(faucet_account, client),
            TransferDispatcher(faucet_account, client, confirm_timeout=confirm_timeout),
            ClaimStats(recent_cap),
            **kwargs,
        )
    return _make
