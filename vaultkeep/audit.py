"""
Security audit over the vault contents: reused and weak login passwords
and the resulting health score.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .models import LoginItem, VaultItem
from . import config


@dataclass
class AuditReport:
    """Derived security summary for a vault snapshot."""
    score: int
    reused: List[LoginItem] = field(default_factory=list)
    weak: List[LoginItem] = field(default_factory=list)

    @property
    def label(self) -> str:
        return health_label(self.score)

    def reused_groups(self) -> List[List[LoginItem]]:
        """Reused logins grouped by the password they share."""
        groups: Dict[str, List[LoginItem]] = defaultdict(list)
        for item in self.reused:
            groups[item.password].append(item)
        return list(groups.values())


def compute_audit(items: Iterable[VaultItem]) -> AuditReport:
    """
    Audit the login items of a vault.

    A login is weak when its password is shorter than
    ``config.WEAK_PASSWORD_LENGTH`` (a missing password has length 0) and
    reused when another login has the same non-empty password. An item may
    be both and is then penalized twice.
    """
    logins = [item for item in items if isinstance(item, LoginItem)]
    if not logins:
        return AuditReport(score=config.MAX_HEALTH_SCORE)

    counts: Dict[str, int] = defaultdict(int)
    for item in logins:
        if item.password:
            counts[item.password] += 1

    # Empty passwords are not "shared"; they are already weak
    reused = [item for item in logins if item.password and counts[item.password] > 1]
    weak = [item for item in logins if len(item.password or "") < config.WEAK_PASSWORD_LENGTH]

    penalty = len(reused) * config.REUSED_PENALTY + len(weak) * config.WEAK_PENALTY
    score = max(0, config.MAX_HEALTH_SCORE - penalty)
    return AuditReport(score=score, reused=reused, weak=weak)


def health_label(score: int) -> str:
    if score > config.HEALTH_EXCELLENT_THRESHOLD:
        return 'excellent'
    if score > config.HEALTH_GOOD_THRESHOLD:
        return 'good'
    return 'needs_work'
