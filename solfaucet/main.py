import asyncio
import logging

from solfaucet.core.live_config import config
from solfaucet.defense.balance_gate import BalanceGate
from solfaucet.defense.cooldown_ledger import CooldownLedger
from solfaucet.exec.claim_orchestrator import ClaimOrchestrator
from solfaucet.exec.transfer_dispatcher import TransferDispatcher
from solfaucet.inputs.api.faucet_api import FaucetApi
from solfaucet.inputs.wallet.wallet_core import FaucetAccount
from solfaucet.memory.claim_stats import ClaimStats
from solfaucet.utils.logger import log_event
from solfaucet.utils.solana_client import SolanaClient

logger = logging.getLogger("main")


def build_orchestrator(cfg=None, client=None, account=None) -> ClaimOrchestrator:
    """Wire the faucet components from config. The account is loaded once; a bad secret disables claims."""
    cfg = config if cfg is None else cfg
    client = client or SolanaClient()
    if account is None:
        account = FaucetAccount.from_secret(cfg.get("faucet_pk"))
    return ClaimOrchestrator(
        account,
        CooldownLedger(cfg["cooldown_hours"]),
        BalanceGate(account, client),
        TransferDispatcher(account, client, confirm_timeout=cfg["confirm_timeout"]),
        ClaimStats(cfg["recent_claims_cap"]),
        claim_amount=cfg["claim_amount"],
        fee_reserve=cfg["fee_reserve"],
    )


async def main():
    orchestrator = build_orchestrator()
    api = FaucetApi(orchestrator)
    await api.start(port=int(config["port"]))

    log_event(f"💰 Claim amount: {config['claim_amount']} SOL")
    log_event(f"⏰ Cooldown: {config['cooldown_hours']} hours")
    if not orchestrator.enabled:
        logger.warning("Faucet wallet not loaded: /api/claim is disabled, /api/info reports zero balance")

    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await api.stop()


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log_event("🛑 Faucet stopped")


if __name__ == "__main__":
    run()
