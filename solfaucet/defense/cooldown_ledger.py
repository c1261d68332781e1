import math
from dataclasses import dataclass
from typing import Dict, Optional

SECONDS_PER_HOUR = 3600
DEFAULT_COOLDOWN_HOURS = 24


@dataclass(frozen=True)
class Eligibility:
    eligible: bool
    hours_remaining: int = 0


class CooldownLedger:
    """
    Last successful claim time per wallet (epoch seconds).
    Entries are overwritten on each success and never removed.
    """

    def __init__(self, cooldown_hours: float = DEFAULT_COOLDOWN_HOURS):
        self.window_seconds = float(cooldown_hours) * SECONDS_PER_HOUR
        self._last_claim: Dict[str, float] = {}

    def check_eligible(self, address: str, now: float) -> Eligibility:
        last = self._last_claim.get(address)
        if last is None:
            return Eligibility(True)
        elapsed = now - last
        if elapsed >= self.window_seconds:
            return Eligibility(True)
        hours_left = math.ceil((self.window_seconds - elapsed) / SECONDS_PER_HOUR)
        return Eligibility(False, hours_left)

    def record_claim(self, address: str, now: float) -> None:
        # Only after a confirmed transfer.
        self._last_claim[address] = now

    def last_claim(self, address: str) -> Optional[float]:
        return self._last_claim.get(address)

    def __len__(self) -> int:
        return len(self._last_claim)
