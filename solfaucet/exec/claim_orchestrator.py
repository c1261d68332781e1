# exec/claim_orchestrator.py

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Dict

from solfaucet.defense.balance_gate import BalanceGate
from solfaucet.defense.cooldown_ledger import CooldownLedger
from solfaucet.exec.transfer_dispatcher import TransferDispatcher
from solfaucet.inputs.wallet.wallet_core import check_recipient
from solfaucet.memory.claim_stats import ClaimRecord, ClaimStats
from solfaucet.utils.logger import log_claim, log_error, log_event
from solfaucet.utils.solana_client import lamports_to_sol, sol_to_lamports

# === Claim outcomes ===
COMMITTED = "committed"
NOT_CONFIGURED = "faucet_not_configured"
INVALID_WALLET = "invalid_wallet"
INVALID_ADDRESS = "invalid_address"
COOLDOWN_ACTIVE = "cooldown_active"
FAUCET_EMPTY = "faucet_empty"
TRANSFER_FAILED = "transfer_failed"


@dataclass(frozen=True)
class ClaimOutcome:
    status: str
    tx_hash: str = ""
    hours_remaining: int = 0

    @property
    def ok(self) -> bool:
        return self.status == COMMITTED


class ClaimOrchestrator:
    """
    Runs one claim end to end:
        validate address -> cooldown check -> balance gate -> transfer -> commit

    Two locks keep it safe under concurrent requests:
      - a per-wallet lock (created lazily, never dropped) held for the whole
        sequence, so two claims for one wallet cannot both pass the cooldown
        check before either records;
      - one global dispatch lock held from balance admission until the
        transfer settles, so claims for different wallets cannot all be
        admitted against the same balance reading.

    Cooldown and stats are only written after a confirmed transfer, in the
    same step and with no await in between.
    """

    def __init__(
        self,
        account,
        ledger: CooldownLedger,
        gate: BalanceGate,
        dispatcher: TransferDispatcher,
        stats: ClaimStats,
        *,
        claim_amount: float,
        fee_reserve: float,
        clock: Callable[[], float] = time.time,
    ):
        self.account = account
        self.ledger = ledger
        self.gate = gate
        self.dispatcher = dispatcher
        self.stats = stats
        self.claim_amount = claim_amount
        self.claim_lamports = sol_to_lamports(claim_amount)
        self.fee_reserve_lamports = sol_to_lamports(fee_reserve)
        self.clock = clock

        self._wallet_locks: Dict[str, asyncio.Lock] = {}
        self._dispatch_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.account is not None

    def _wallet_lock(self, address: str) -> asyncio.Lock:
        lock = self._wallet_locks.get(address)
        if lock is None:
            lock = asyncio.Lock()
            self._wallet_locks[address] = lock
        return lock

    async def claim(self, wallet) -> ClaimOutcome:
        if not self.enabled:
            log_event(f"⚠️ Claim refused, faucet not configured (wallet={wallet!r})")
            return ClaimOutcome(NOT_CONFIGURED)

        pubkey, reason = check_recipient(wallet)
        if pubkey is None:
            log_event(f"⛔ Rejected claim: {reason} (wallet={wallet!r})")
            return ClaimOutcome(reason)
        address = str(pubkey)

        async with self._wallet_lock(address):
            eligibility = self.ledger.check_eligible(address, self.clock())
            if not eligibility.eligible:
                log_event(f"⏳ Cooldown active for {address}: {eligibility.hours_remaining}h left")
                return ClaimOutcome(COOLDOWN_ACTIVE, hours_remaining=eligibility.hours_remaining)

            async with self._dispatch_lock:
                decision = await self.gate.admit(self.claim_lamports, self.fee_reserve_lamports)
                if not decision.admitted:
                    log_event(
                        f"🚱 Faucet empty: balance {lamports_to_sol(decision.balance_lamports):.4f} SOL "
                        f"< required {lamports_to_sol(decision.required_lamports):.4f} SOL ({address})"
                    )
                    return ClaimOutcome(FAUCET_EMPTY)

                log_event(f"💸 Sending {self.claim_amount} SOL to {address}")
                result = await self.dispatcher.submit(pubkey, self.claim_lamports)

            if not result.ok:
                log_error(f"Claim failed for {address} at {self.clock():.0f}: {result.reason}")
                return ClaimOutcome(TRANSFER_FAILED)

            committed_at = self.clock()
            self.ledger.record_claim(address, committed_at)
            self.stats.record_success(
                self.claim_lamports,
                ClaimRecord(wallet=address, time=int(committed_at * 1000), tx_hash=result.tx_hash),
            )

        log_claim(address, self.claim_amount, result.tx_hash)
        log_event(f"✅ Sent! TX: {result.tx_hash}")
        return ClaimOutcome(COMMITTED, tx_hash=result.tx_hash)

    async def info(self, recent_limit: int | None = None) -> dict:
        balance = await self.gate.get_balance_lamports() if self.enabled else 0
        snap = self.stats.snapshot(recent_limit)
        return {
            "balance": lamports_to_sol(balance),
            "wallet": self.account.address if self.enabled else "",
            "claimAmount": self.claim_amount,
            "totalClaims": snap["totalClaims"],
            "totalSent": snap["totalSent"],
            "recentClaims": snap["recentClaims"],
        }
