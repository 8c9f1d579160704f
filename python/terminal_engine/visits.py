"""Visit tally and milestone announcements."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from .flags import SessionFlags
from .models import VisitStats
from .scheduling import Scheduler, TimerGroup


__all__ = ["VisitTracker", "milestone_messages", "today_utc"]


logger = logging.getLogger(__name__)


CONTACT_ADDRESS = "future-colleagues@switchup.tech"


def today_utc() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def milestone_messages(stats: VisitStats) -> list[str]:
    """
    Return every milestone message earned by the given tally.

    Several milestones can fire on the same visit (e.g. visit 5 on the third
    distinct day). The first visit earns nothing.
    """
    visits = stats.count
    days = stats.unique_days
    messages: list[str] = []

    if visits <= 1:
        return messages

    if visits == 3:
        messages.append("Visit #3: \"Oh hey, it's you again!\" (Our backend logs, probably)")
    if visits == 5:
        messages.append(
            "Visit #5: At this point you've spent more time here than some of our interns. "
            "We should probably put you on payroll."
        )
    if visits == 10:
        messages.append(
            f"Visit #10: TEN. TIMES. You make it official. -> {CONTACT_ADDRESS}"
        )
    if days == 3:
        messages.append(
            "Day #3: Three different days. You're doing reconnaissance. We respect that. "
            "(Type \"stack\" to see our tech choices.)"
        )
    if days == 5:
        messages.append(
            "Day #5: You're basically part of the team's daily standup at this point. "
            "Except you don't get the free coffee. Yet."
        )
    if days == 7:
        messages.append(
            f"A FULL WEEK: Seven. Days. In. A. Row. No joke: Email us. -> {CONTACT_ADDRESS}"
        )
    if visits == 15 and days < 3:
        messages.append(
            "Visit #15 (in one day?!): Either our page is REALLY good, or you're debugging something."
        )
    if visits >= 20:
        messages.append(
            f"ACHIEVEMENT UNLOCKED \"Persistent Legend\": {visits} visits across {days} days. "
            f"Subject: \"I visited your site {visits} times. Now can we talk?\" -> {CONTACT_ADDRESS}"
        )
    if days >= 3 and 5 <= visits < 20:
        messages.append(f"Your persistence stats: {visits} visits • {days} unique days")

    return messages


class VisitTracker:
    """
    Records one visit per session start and announces milestones.

    Milestones are emitted as INFO log records ``announce_delay`` seconds
    after the visit is recorded.
    """

    def __init__(
        self,
        flags: SessionFlags,
        scheduler: Scheduler,
        announce_delay: float = 1.5,
    ) -> None:
        self._flags = flags
        self._announce_delay = announce_delay
        self._timers = TimerGroup(scheduler, name="visit announcements")
        self._stats = VisitStats()
        self._announced: list[str] = []

    @property
    def stats(self) -> VisitStats:
        return self._stats

    @property
    def announced(self) -> list[str]:
        """Milestone messages already logged in this process."""
        return list(self._announced)

    def record_visit(self, today: Optional[str] = None) -> VisitStats:
        """Increment the tally, add today's date if new, persist, schedule announcements."""
        current = self._flags.load_visits()
        day = today or today_utc()
        days = list(current.days)
        if day not in days:
            days.append(day)
        self._stats = VisitStats(count=current.count + 1, days=days)
        self._flags.save_visits(self._stats)
        logger.info("Visit #%d recorded (%d unique days)", self._stats.count, self._stats.unique_days)

        messages = milestone_messages(self._stats)
        if messages:
            self._timers.schedule(self._announce_delay, lambda: self._announce(messages))
        return self._stats

    def _announce(self, messages: list[str]) -> None:
        for message in messages:
            logger.info("%s", message)
            self._announced.append(message)

    def teardown(self) -> None:
        self._timers.cancel_all()
