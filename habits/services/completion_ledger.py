import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.dateparse import parse_date

from ..clock import system_clock
from ..exceptions import ConflictError, NotFound, ValidationError
from ..models import Completion, Habit

logger = logging.getLogger(__name__)


class CompletionLedger:
    """
    Per-day completion log for habits.

    Writers lock the owning habit row, so complete/uncomplete/delete on the
    same habit are serialized. The (habit, completed_on) unique constraint
    keeps at most one entry per day even where row locks are unavailable.
    """

    def __init__(self, clock=None):
        self.clock = clock or system_clock

    def complete(self, habit_id, on=None) -> Completion:
        """Record a completion. Completing an already completed day returns the existing entry."""
        completion, _ = self.complete_with_status(habit_id, on)
        return completion

    def complete_with_status(self, habit_id, on=None) -> Tuple[Completion, bool]:
        day = self._resolve_date(on)
        if day > self.clock.today():
            raise ValidationError(
                "Cannot record a completion in the future",
                {'date': day.isoformat(), 'today': self.clock.today().isoformat()},
            )

        with transaction.atomic():
            habit = self._lock_habit(habit_id)
            try:
                completion, created = Completion.objects.get_or_create(habit=habit, completed_on=day)
            except IntegrityError as e:
                logger.warning(f"Completion race for habit {habit_id} on {day}: {e}")
                raise ConflictError(
                    f"Habit {habit_id} was modified concurrently",
                    {'habit_id': habit_id, 'date': day.isoformat()},
                ) from e

        if created:
            logger.info(f"Completion recorded: habit={habit_id} date={day}")
        return completion, created

    def uncomplete(self, habit_id, on=None) -> bool:
        """Remove the completion for a day. Returns False if there was none."""
        day = self._resolve_date(on)

        with transaction.atomic():
            habit = self._lock_habit(habit_id)
            deleted, _ = Completion.objects.filter(habit=habit, completed_on=day).delete()

        if deleted:
            logger.info(f"Completion removed: habit={habit_id} date={day}")
        return deleted > 0

    def is_completed(self, habit_id, on=None) -> bool:
        day = self._resolve_date(on)
        return Completion.objects.filter(habit_id=habit_id, completed_on=day).exists()

    def completions_for(self, habit_id) -> List[date]:
        """Completion dates for a habit, ascending."""
        if not Habit.objects.filter(pk=habit_id).exists():
            raise NotFound(habit_id)
        return list(
            Completion.objects.filter(habit_id=habit_id)
            .order_by('completed_on')
            .values_list('completed_on', flat=True)
        )

    def completions_by_habit(self) -> Dict[int, List[date]]:
        """Every habit's completion dates in one query, ascending per habit."""
        by_habit = defaultdict(list)
        rows = Completion.objects.order_by('habit_id', 'completed_on').values_list('habit_id', 'completed_on')
        for habit_id, completed_on in rows:
            by_habit[habit_id].append(completed_on)
        return dict(by_habit)

    def count_by_date(self, start: date, end: date) -> Dict[date, int]:
        """Number of completions (across all habits) recorded on each date in [start, end]."""
        counts = defaultdict(int)
        rows = Completion.objects.filter(completed_on__gte=start, completed_on__lte=end).values_list('completed_on', flat=True)
        for completed_on in rows:
            counts[completed_on] += 1
        return dict(counts)

    def _lock_habit(self, habit_id) -> Habit:
        try:
            return Habit.objects.select_for_update().get(pk=habit_id)
        except Habit.DoesNotExist:
            raise NotFound(habit_id)

    def _resolve_date(self, on: Optional[object]) -> date:
        if on is None or on == '':
            return self.clock.today()
        if isinstance(on, datetime):
            return timezone.localdate(on)
        if isinstance(on, date):
            return on
        try:
            parsed = parse_date(str(on))
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationError("Invalid date, expected YYYY-MM-DD", {'date': str(on)})
        return parsed
