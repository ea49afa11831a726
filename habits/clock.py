from datetime import date, datetime, time

from django.utils import timezone


class Clock:
    """Wall-clock time provider. Dates are local to settings.TIME_ZONE."""

    def now(self) -> datetime:
        return timezone.now()

    def today(self) -> date:
        return timezone.localdate(self.now())


class FixedClock(Clock):
    """A clock pinned to one instant, for tests and backfills."""

    def __init__(self, moment):
        if isinstance(moment, date) and not isinstance(moment, datetime):
            moment = timezone.make_aware(datetime.combine(moment, time(12, 0)))
        elif timezone.is_naive(moment):
            moment = timezone.make_aware(moment)
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


system_clock = Clock()
