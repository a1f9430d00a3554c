"""Interest accrual on unpaid principal penalties."""

from __future__ import annotations

import logging

from icetracker.models import INTEREST, INTEREST_PLAYER_NAME
from icetracker.persistence import LedgerStore


logger = logging.getLogger(__name__)


def target_interest(current_week: int, week_incurred: int, *, grace_weeks: int = 1) -> int:
    """Interest units a principal should carry by ``current_week``, never negative."""

    return max(0, current_week - week_incurred - grace_weeks)


class InterestCalculator:
    """Tops up interest records to the target derived from the current week.

    The target is recomputed from scratch on every call, so skipped runs heal
    on the next one and repeated runs create nothing.
    """

    def __init__(self, store: LedgerStore, *, grace_weeks: int = 1):
        self.store = store
        self.grace_weeks = grace_weeks

    def reconcile(self, current_week: int, season: str) -> int:
        created = 0
        for principal in self.store.list_pending_principals(season):
            target = target_interest(current_week, principal.week_incurred, grace_weeks=self.grace_weeks)
            if target <= 0:
                continue
            have = self.store.count_interest(principal.id)
            needed = target - have
            for _ in range(needed):
                self.store.insert_penalty(
                    roster_id=principal.roster_id,
                    team_name=principal.team_name,
                    player_name=INTEREST_PLAYER_NAME,
                    week_incurred=principal.week_incurred,
                    score=0,
                    kind=INTEREST,
                    season=season,
                    parent_id=principal.id,
                )
                created += 1
            if needed > 0:
                logger.info(
                    "Interest: %s owes %d on week %d ice (%s)",
                    principal.team_name,
                    target,
                    principal.week_incurred,
                    principal.player_name,
                )
        return created
