# utils/rpc_loader.py
import time

from solfaucet.core.live_config import config
from solfaucet.utils.logger import log_event

FAILURE_THRESHOLD = 3
COOLDOWN_PERIOD = 600  # seconds (10 mins)

# === Runtime state ===
_rpc_pool = []
_rpc_failures = {}
_cooldown_rpcs = {}


def load_rpcs(raw=None):
    """
    Load RPC endpoints from the comma separated `solana_rpc` setting.
    """
    global _rpc_pool
    raw = config.get("solana_rpc", "") if raw is None else raw
    _rpc_pool = [url.strip() for url in str(raw).split(",") if url.strip()]
    _rpc_failures.clear()
    _cooldown_rpcs.clear()
    log_event(f"🔁 Loaded {len(_rpc_pool)} Solana RPC endpoint(s)")
    return list(_rpc_pool)


def report_rpc_failure(rpc_url):
    """
    Marks an RPC endpoint as failing and places it on cooldown if threshold exceeded.
    """
    if not rpc_url:
        return
    _rpc_failures[rpc_url] = _rpc_failures.get(rpc_url, 0) + 1
    if _rpc_failures[rpc_url] >= FAILURE_THRESHOLD and rpc_url not in _cooldown_rpcs:
        _cooldown_rpcs[rpc_url] = time.time() + COOLDOWN_PERIOD
        log_event(f"🧊 RPC on cooldown: {rpc_url}")


def report_rpc_success(rpc_url):
    _rpc_failures.pop(rpc_url, None)


def cleanup_cooldowns():
    """
    Removes RPCs from cooldown once their cooldown period expires.
    """
    now = time.time()
    to_remove = [rpc for rpc, expiry in _cooldown_rpcs.items() if now > expiry]
    for rpc in to_remove:
        del _cooldown_rpcs[rpc]
        _rpc_failures.pop(rpc, None)
        log_event(f"✅ RPC cooldown expired: {rpc}")


def get_active_rpc():
    """
    First endpoint not on cooldown; the head of the pool if all are cooling down.
    """
    cleanup_cooldowns()
    for rpc in _rpc_pool:
        if rpc not in _cooldown_rpcs:
            return rpc
    if _rpc_pool:
        log_event("⚠️ All RPCs on cooldown, using primary endpoint.")
        return _rpc_pool[0]
    return None


# === Startup init ===
load_rpcs()
