import json
from typing import Optional, Tuple

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solfaucet.utils.logger import log_error, log_event

MIN_ADDRESS_LEN = 32
MAX_ADDRESS_LEN = 50


class FaucetAccount:
    """
    The dispensing identity: keypair plus derived address.
    Built once at startup; `from_secret` returns None when the secret is
    missing or undecodable so the faucet stays disabled.
    """

    def __init__(self, keypair: Keypair):
        self.keypair = keypair
        self.public_key: Pubkey = keypair.pubkey()
        self.address = str(self.public_key)

    @classmethod
    def from_secret(cls, secret: Optional[str]) -> Optional["FaucetAccount"]:
        if not secret:
            log_event("⚠️  No FAUCET_PK configured, claiming is disabled")
            return None
        try:
            secret = secret.strip()
            if secret.startswith("["):
                # solana-keygen style JSON byte array
                keypair = Keypair.from_bytes(bytes(json.loads(secret)))
            else:
                keypair = Keypair.from_base58_string(secret)
        except Exception as e:
            log_error(f"❌ Failed to initialize faucet wallet: {e}")
            return None
        account = cls(keypair)
        log_event(f"✅ Faucet wallet initialized: {account.address}")
        return account


def check_recipient(wallet) -> Tuple[Optional[Pubkey], str]:
    """
    Validate a claimant address before anything is keyed by it.
    Returns (pubkey, "ok"), (None, "invalid_wallet") or (None, "invalid_address").
    """
    if not isinstance(wallet, str) or not (MIN_ADDRESS_LEN <= len(wallet) <= MAX_ADDRESS_LEN):
        return None, "invalid_wallet"
    try:
        return Pubkey.from_string(wallet), "ok"
    except Exception:
        return None, "invalid_address"
