"""
Cross-habit statistics and chart series.

Every figure here goes through StreakEngine, so /habits, /stats and the
charts all agree on one completion rate formula: the mean of per-habit
rates over each habit's lookback window.
"""
import logging
from dataclasses import asdict, dataclass, field
from datetime import timedelta
from typing import List, Tuple

from django.db import transaction

from ..clock import system_clock
from ..models import Habit
from .completion_ledger import CompletionLedger
from .streak_engine import HabitProgress, StreakEngine

logger = logging.getLogger(__name__)

MAX_CHART_DAYS = 365


@dataclass
class Stats:
    total_habits: int = 0
    completed_today: int = 0
    total_completions: int = 0
    average_streak: float = 0.0
    best_streak: int = 0
    completion_rate: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class ChartData:
    labels: List[str] = field(default_factory=list)
    data: List[float] = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


class StatsService:

    def __init__(self, clock=None, engine=None, ledger=None):
        self.clock = clock or system_clock
        self.engine = engine or StreakEngine(clock=self.clock)
        self.ledger = ledger or CompletionLedger(clock=self.clock)

    def snapshot(self) -> List[Tuple[Habit, HabitProgress, int]]:
        """
        (habit, progress, completion count) for every habit, in creation order.
        Habits and completions are read in one transaction.
        """
        today = self.clock.today()
        with transaction.atomic():
            habits = list(Habit.objects.order_by('created_at', 'id'))
            dates_by_habit = self.ledger.completions_by_habit()

        result = []
        for habit in habits:
            dates = dates_by_habit.get(habit.id, [])
            result.append((habit, self.engine.progress(habit, dates, today=today), len(dates)))
        return result

    def compute_stats(self) -> Stats:
        rows = self.snapshot()
        if not rows:
            return Stats()

        progresses = [progress for _, progress, _ in rows]
        stats = Stats(
            total_habits=len(rows),
            completed_today=sum(1 for p in progresses if p.is_completed_today),
            total_completions=sum(count for _, _, count in rows),
            average_streak=sum(p.current_streak for p in progresses) / len(progresses),
            best_streak=max(p.longest_streak for p in progresses),
            completion_rate=sum(p.completion_rate for p in progresses) / len(progresses),
        )
        logger.debug(f"Stats computed: {stats}")
        return stats

    def completion_rate_chart(self) -> ChartData:
        chart = ChartData()
        for habit, progress, _ in self.snapshot():
            chart.labels.append(habit.name)
            chart.data.append(round(progress.completion_rate, 1))
        return chart

    def streak_chart(self) -> ChartData:
        rows = self.snapshot()
        # sorted() is stable, so ties keep creation order
        rows = sorted(rows, key=lambda row: row[1].current_streak, reverse=True)
        return ChartData(
            labels=[habit.name for habit, _, _ in rows],
            data=[progress.current_streak for _, progress, _ in rows],
        )

    def daily_completions_chart(self, days=30) -> ChartData:
        """Completions per day over the last ``days`` days, oldest first."""
        days = max(1, min(int(days), MAX_CHART_DAYS))
        end = self.clock.today()
        start = end - timedelta(days=days - 1)
        counts = self.ledger.count_by_date(start, end)

        chart = ChartData()
        for offset in range(days):
            day = start + timedelta(days=offset)
            chart.labels.append(f"{day:%b} {day.day}")
            chart.data.append(counts.get(day, 0))
        return chart
