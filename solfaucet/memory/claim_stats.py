from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List

from solfaucet.utils.solana_client import lamports_to_sol

DEFAULT_RECENT_CAP = 50


@dataclass(frozen=True)
class ClaimRecord:
    wallet: str
    time: int        # epoch millis
    tx_hash: str


class ClaimStats:
    """
    Running totals plus a bounded log of recent claims. Reporting only;
    nothing here feeds claim decisions.
    """

    def __init__(self, recent_cap: int = DEFAULT_RECENT_CAP):
        self.total_claims: int = 0
        self.total_sent_lamports: int = 0
        self.recent: Deque[ClaimRecord] = deque(maxlen=max(1, int(recent_cap)))

    def record_success(self, lamports: int, record: ClaimRecord) -> None:
        self.total_claims += 1
        self.total_sent_lamports += int(lamports)
        self.recent.append(record)

    @property
    def total_sent(self) -> float:
        return lamports_to_sol(self.total_sent_lamports)

    def recent_claims(self, limit: int | None = None) -> List[ClaimRecord]:
        items = list(self.recent)
        if limit is not None:
            items = items[-limit:] if limit > 0 else []
        return items

    def snapshot(self, limit: int | None = None) -> Dict:
        return {
            "totalClaims": self.total_claims,
            "totalSent": self.total_sent,
            "recentClaims": [{"wallet": r.wallet, "time": r.time} for r in self.recent_claims(limit)],
        }
