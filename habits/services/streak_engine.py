from collections import Counter
from dataclasses import dataclass
from datetime import date
from fractions import Fraction
from typing import Iterable, List, Optional, Tuple

from django.conf import settings
from django.utils import timezone

from ..clock import system_clock
from ..models import Habit

DEFAULT_WINDOW = 30


@dataclass(frozen=True)
class HabitProgress:
    """Derived view of a habit's ledger. Recomputed on every read."""
    current_streak: int = 0
    longest_streak: int = 0
    completion_rate: float = 0.0
    is_completed_today: bool = False


def week_index(day: date) -> int:
    # date.min (0001-01-01) is a Monday, so ordinals group cleanly into weeks.
    return (day.toordinal() - 1) // 7


def day_index(day: date) -> int:
    return day.toordinal()


def qualifying_periods(frequency: str, target_count: int, dates: Iterable[date]) -> List[int]:
    """
    Sorted indexes of the periods that met their target.

    Daily habits qualify on any day with a completion. Weekly habits
    qualify on a Monday-start week holding at least ``target_count``
    completions (1 for plain weekly habits).
    """
    if frequency == Habit.DAILY:
        return sorted({day_index(d) for d in dates})

    needed = target_count if frequency == Habit.MULTIPLE_TIMES_WEEK else 1
    per_week = Counter(week_index(d) for d in set(dates))
    return sorted(week for week, count in per_week.items() if count >= needed)


def runs(periods: List[int]) -> List[Tuple[int, int]]:
    """Split sorted period indexes into ``(last_period, length)`` runs."""
    result = []
    length = 0
    previous = None
    for period in periods:
        if previous is not None and period == previous + 1:
            length += 1
        else:
            if previous is not None:
                result.append((previous, length))
            length = 1
        previous = period
    if previous is not None:
        result.append((previous, length))
    return result


def current_and_longest(periods: List[int], current_period: int) -> Tuple[int, int]:
    """
    The trailing run counts as current if it ends in the current period or
    the one before it; an unfinished current period does not break a streak.
    """
    all_runs = runs(periods)
    if not all_runs:
        return 0, 0

    longest = max(length for _, length in all_runs)
    last_period, last_length = all_runs[-1]
    if current_period - last_period <= 1:
        return last_length, longest
    return 0, longest


def completion_rate(periods: List[int], current_period: int, first_period: int, window: int) -> Fraction:
    """
    Percentage of qualifying periods over the lookback window.

    The window is the last ``window`` periods up to and including the
    current one, never starting before ``first_period``.
    """
    if window < 1:
        raise ValueError(f"Completion window must be at least one period, got {window}")
    start = max(current_period - window + 1, min(first_period, current_period))
    total = current_period - start + 1
    hits = sum(1 for period in periods if start <= period <= current_period)
    return Fraction(hits, total) * 100


def compute_progress(frequency: str, target_count: int, dates: Iterable[date], today: date,
                     created_on: Optional[date] = None, window: int = DEFAULT_WINDOW) -> HabitProgress:
    """Derive streaks and completion rate from a habit's completion dates."""
    dates = [d for d in dates if d <= today]
    if not dates:
        return HabitProgress()

    periods = qualifying_periods(frequency, target_count, dates)
    index = day_index if frequency == Habit.DAILY else week_index

    current_period = index(today)
    first_period = index(min([created_on or today] + dates))

    current, longest = current_and_longest(periods, current_period)
    rate = completion_rate(periods, current_period, first_period, window)

    return HabitProgress(
        current_streak=current,
        longest_streak=longest,
        completion_rate=float(rate),
        is_completed_today=today in dates,
    )


class StreakEngine:
    """
    Computes streaks and completion rates for habits.
    Nothing here is cached: each call walks the full completion history.
    """

    def __init__(self, clock=None, window=None):
        self.clock = clock or system_clock
        if window is None:
            window = getattr(settings, 'HABITS_COMPLETION_WINDOW', DEFAULT_WINDOW)
        if window < 1:
            raise ValueError(f"Completion window must be at least one period, got {window}")
        self.window = window

    def progress(self, habit: Habit, dates: Optional[Iterable[date]] = None, today: Optional[date] = None) -> HabitProgress:
        if dates is None:
            dates = habit.completions.values_list('completed_on', flat=True)
        today = today or self.clock.today()
        created_on = timezone.localdate(habit.created_at) if habit.created_at else None

        return compute_progress(
            habit.frequency,
            habit.target_count,
            dates,
            today,
            created_on=created_on,
            window=self.window,
        )
