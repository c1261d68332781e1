# utils/solana_client.py
from __future__ import annotations

import logging

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.types import TxOpts
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from solfaucet.utils.rpc_loader import get_active_rpc, report_rpc_failure, report_rpc_success

LAMPORTS_PER_SOL = 1_000_000_000
DEFAULT_RPC_TIMEOUT = 30  # seconds per HTTP round trip


def sol_to_lamports(amount_sol: float) -> int:
    return int(round(amount_sol * LAMPORTS_PER_SOL))


def lamports_to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


class SolanaClient:
    """
    Thin async adapter over solana-py for the two calls the faucet needs:
    confirmed balance reads and confirmed SOL transfers.
    """

    def __init__(self, rpc_url: str | None = None, timeout: float = DEFAULT_RPC_TIMEOUT):
        self._rpc_url = rpc_url
        self._timeout = timeout

    def _endpoint(self) -> str:
        rpc = self._rpc_url or get_active_rpc()
        if not rpc:
            raise RuntimeError("no Solana RPC endpoint configured")
        return rpc

    async def get_balance_lamports(self, pubkey: Pubkey) -> int:
        rpc = self._endpoint()
        try:
            async with AsyncClient(rpc, commitment=Confirmed, timeout=self._timeout) as client:
                resp = await client.get_balance(pubkey, commitment=Confirmed)
        except Exception:
            report_rpc_failure(rpc)
            raise
        report_rpc_success(rpc)
        return int(resp.value)

    async def transfer(self, keypair: Keypair, to_pubkey: Pubkey, lamports: int) -> str:
        """
        Sign and submit a system transfer, then wait for `confirmed` status.
        Returns the transaction signature; raises on any failure.
        """
        rpc = self._endpoint()
        try:
            async with AsyncClient(rpc, commitment=Confirmed, timeout=self._timeout) as client:
                latest = (await client.get_latest_blockhash(Confirmed)).value
                ix = transfer(
                    TransferParams(
                        from_pubkey=keypair.pubkey(),
                        to_pubkey=to_pubkey,
                        lamports=lamports,
                    )
                )
                tx = Transaction([keypair], Message([ix], keypair.pubkey()), latest.blockhash)
                sig = (await client.send_transaction(tx, opts=TxOpts(preflight_commitment=Confirmed))).value
                logging.debug(f"[SolanaClient] submitted {sig}, awaiting confirmation")

                statuses = await client.confirm_transaction(
                    sig,
                    Confirmed,
                    last_valid_block_height=latest.last_valid_block_height,
                )
                status = statuses.value[0] if statuses.value else None
                if status is None:
                    raise RuntimeError(f"no status returned for {sig}")
        except Exception:
            report_rpc_failure(rpc)
            raise
        report_rpc_success(rpc)
        if status.err is not None:
            raise RuntimeError(f"transaction {sig} failed on-chain: {status.err}")
        return str(sig)
