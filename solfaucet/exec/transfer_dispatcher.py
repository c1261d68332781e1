# exec/transfer_dispatcher.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from solders.pubkey import Pubkey

from solfaucet.utils.logger import log_error

DEFAULT_CONFIRM_TIMEOUT = 60  # seconds


@dataclass(frozen=True)
class TransferResult:
    ok: bool
    tx_hash: str = ""
    reason: str = ""


class TransferDispatcher:
    """
    Single boundary to the ledger client for outbound transfers.

    Every exception (RPC error, rejected signature, insufficient funds at
    submission, confirmation timeout) comes back as TransferResult(ok=False).
    No retries here: a resubmission after an unobserved confirmation could
    pay the same claim twice.
    """

    def __init__(self, account, client, confirm_timeout: float = DEFAULT_CONFIRM_TIMEOUT):
        self.account = account
        self.client = client
        self.confirm_timeout = confirm_timeout

    async def submit(self, to_address: Pubkey, lamports: int) -> TransferResult:
        if self.account is None:
            return TransferResult(ok=False, reason="faucet_not_configured")
        try:
            sig = await asyncio.wait_for(
                self.client.transfer(self.account.keypair, to_address, lamports),
                timeout=self.confirm_timeout,
            )
        except asyncio.TimeoutError:
            log_error(f"Transfer to {to_address} not confirmed within {self.confirm_timeout}s")
            return TransferResult(ok=False, reason="timeout")
        except Exception as e:
            log_error(f"Send error to {to_address}: {type(e).__name__}: {e}")
            return TransferResult(ok=False, reason=type(e).__name__)
        if not sig:
            return TransferResult(ok=False, reason="no_signature")
        return TransferResult(ok=True, tx_hash=str(sig))
