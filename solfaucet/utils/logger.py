import logging
import os

from solfaucet.core.live_config import config

LOG_DIR = config.get("log_dir") or "runtime/logs"
CLAIM_LOG = os.path.join(LOG_DIR, "claims.log")
ERROR_LOG = os.path.join(LOG_DIR, "errors.log")
SYSTEM_LOG = os.path.join(LOG_DIR, "system.log")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

os.makedirs(LOG_DIR, exist_ok=True)


def _file_handler(path: str, level: int = logging.NOTSET, fmt: str = LOG_FORMAT) -> logging.FileHandler:
    handler = logging.FileHandler(path)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


# === Root: console + system.log, errors also to errors.log ===
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[
        _file_handler(SYSTEM_LOG),
        _file_handler(ERROR_LOG, logging.ERROR),
        logging.StreamHandler(),
    ],
)

# === Claims: one line per confirmed payout, kept out of the system log ===
claims_logger = logging.getLogger("solfaucet.claims")
claims_logger.propagate = False
if not claims_logger.handlers:
    claims_logger.addHandler(_file_handler(CLAIM_LOG, fmt="%(asctime)s | %(message)s"))
claims_logger.setLevel(logging.INFO)


def log_claim(wallet: str, sol_amount: float, tx_hash: str):
    claims_logger.info(f"{wallet} | Amount: {sol_amount:.4f} SOL | TX: {tx_hash}")


def log_error(error: str):
    logging.error(error)


def log_event(event: str):
    logging.info(event)
