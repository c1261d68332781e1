# /defense/balance_gate.py
from __future__ import annotations

from dataclasses import dataclass

from solfaucet.utils.logger import log_error


@dataclass(frozen=True)
class GateDecision:
    admitted: bool
    balance_lamports: int
    required_lamports: int


class BalanceGate:
    """
    Admission check against the faucet's confirmed balance.

    The read is point-in-time; callers that admit and then transfer must hold
    a global lock across both steps so concurrent claims cannot overdraw.
    A missing faucet account or a failed balance read counts as zero balance.
    """

    def __init__(self, account, client):
        self.account = account
        self.client = client

    async def get_balance_lamports(self) -> int:
        if self.account is None:
            return 0
        try:
            return int(await self.client.get_balance_lamports(self.account.public_key))
        except Exception as e:
            log_error(f"Error getting faucet balance: {e}")
            return 0

    async def admit(self, claim_lamports: int, fee_reserve_lamports: int) -> GateDecision:
        required = claim_lamports + fee_reserve_lamports
        balance = await self.get_balance_lamports()
        return GateDecision(balance >= required, balance, required)
