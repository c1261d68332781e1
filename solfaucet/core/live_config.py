import json
import logging
import os

CONFIG_PATH = os.environ.get("FAUCET_CONFIG", "faucet_config.json")

# === Default Configuration ===
DEFAULT_CONFIG = {
    # === Faucet Wallet ===
    "faucet_pk": "",                 # base58 secret or JSON byte array
    "solana_rpc": "https://api.mainnet-beta.solana.com",

    # === Claim Policy ===
    "claim_amount": 0.01,            # SOL per claim
    "cooldown_hours": 24,            # hours between claims per wallet
    "fee_reserve": 0.001,            # SOL kept back for the transfer fee
    "confirm_timeout": 60,           # seconds to wait for confirmation

    # === Stats ===
    "recent_claims_cap": 50,
    "recent_claims_shown": 10,

    # === Server ===
    "port": 3004,
    "public_dir": os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "public"),
    "log_dir": "runtime/logs",
}

# env var -> (config key, cast)
ENV_OVERRIDES = {
    "FAUCET_PK": ("faucet_pk", str),
    "SOLANA_RPC": ("solana_rpc", str),
    "PORT": ("port", int),
    "CLAIM_AMOUNT": ("claim_amount", float),
    "COOLDOWN_HOURS": ("cooldown_hours", float),
    "FEE_RESERVE": ("fee_reserve", float),
    "CONFIRM_TIMEOUT": ("confirm_timeout", float),
    "FAUCET_PUBLIC_DIR": ("public_dir", str),
    "FAUCET_LOG_DIR": ("log_dir", str),
}

config = {}


def load_config(path: str = CONFIG_PATH, environ=None) -> dict:
    """Load the JSON config (if any), back-fill defaults, then apply env overrides."""
    environ = os.environ if environ is None else environ
    loaded = {}
    try:
        if path and os.path.exists(path):
            with open(path, "r") as f:
                loaded = json.load(f)
            logging.info(f"⚙️ Loaded faucet config from {path}")
    except Exception as e:
        logging.error(f"❌ Failed to load faucet config: {e}")
        loaded = {}

    merged = DEFAULT_CONFIG.copy()
    merged.update({k: v for k, v in loaded.items() if k in DEFAULT_CONFIG})

    for env_name, (key, cast) in ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            merged[key] = cast(raw)
        except ValueError:
            logging.warning(f"⚠️ Ignoring malformed {env_name}={raw!r}, keeping {merged[key]!r}")

    config.clear()
    config.update(merged)
    return config


# Initialize at import
load_config()
