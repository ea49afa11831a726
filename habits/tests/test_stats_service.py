from datetime import date, datetime, time, timedelta

from django.test import TestCase
from django.utils import timezone

from habits.clock import FixedClock
from habits.models import Habit, Completion
from habits.services.habit_store import HabitStore
from habits.services.stats_service import Stats, StatsService


class StatsServiceTestCase(TestCase):
    """Test cases for aggregate statistics and chart series."""

    def setUp(self):
        self.today = date(2024, 3, 15)
        self.service = StatsService(clock=FixedClock(self.today))

    def create_habit(self, name, completed_days=(), created_on=None, **fields):
        """Helper method to create a habit with completions on the given days before today."""
        habit = Habit.objects.create(name=name, **fields)
        created_on = created_on or self.today - timedelta(days=9)
        Habit.objects.filter(pk=habit.pk).update(
            created_at=timezone.make_aware(datetime.combine(created_on, time(8, 0)))
        )
        for offset in completed_days:
            Completion.objects.create(habit=habit, completed_on=self.today - timedelta(days=offset))
        habit.refresh_from_db()
        return habit

    def test_no_habits(self):
        self.assertEqual(self.service.compute_stats(), Stats())

    def test_average_and_best_streak(self):
        self.create_habit('Read', completed_days=[1, 2, 3])          # current streak 3
        self.create_habit('Walk', completed_days=[0, 1, 2, 3, 4])    # current streak 5

        stats = self.service.compute_stats()

        self.assertEqual(stats.total_habits, 2)
        self.assertEqual(stats.completed_today, 1)
        self.assertEqual(stats.total_completions, 8)
        self.assertEqual(stats.average_streak, 4.0)
        self.assertEqual(stats.best_streak, 5)

    def test_best_streak_uses_longest_streak(self):
        self.create_habit('Read', completed_days=[0] + list(range(20, 27)), created_on=date(2024, 2, 1))

        stats = self.service.compute_stats()

        self.assertEqual(stats.average_streak, 1.0)
        self.assertEqual(stats.best_streak, 7)

    def test_completion_rate_is_mean_of_habit_rates(self):
        self.create_habit('Read', completed_days=[0, 1, 2, 3, 4, 5, 6, 7, 8, 9])  # 10 of 10 days
        self.create_habit('Walk', completed_days=[0, 2, 4, 6, 8])                # 5 of 10 days

        stats = self.service.compute_stats()

        self.assertAlmostEqual(stats.completion_rate, 75.0)

    def test_new_habit_counts_as_zero_rate(self):
        self.create_habit('Read', completed_days=[0, 1, 2, 3, 4, 5, 6, 7, 8, 9])
        self.create_habit('Fresh', created_on=self.today)

        stats = self.service.compute_stats()

        self.assertAlmostEqual(stats.completion_rate, 50.0)
        self.assertEqual(stats.average_streak, 5.0)

    def test_deleted_habit_disappears_from_stats(self):
        self.create_habit('Read', completed_days=[1, 2, 3])
        walk = self.create_habit('Walk', completed_days=[0, 1, 2, 3, 4])

        HabitStore().delete(walk.id)
        stats = self.service.compute_stats()

        self.assertEqual(stats.total_habits, 1)
        self.assertEqual(stats.completed_today, 0)
        self.assertEqual(stats.total_completions, 3)
        self.assertEqual(stats.best_streak, 3)

    def test_weekly_habit_in_stats(self):
        # 2024-03-15 is a Friday; one completion in each of the last three weeks
        self.create_habit('Call home', completed_days=[2, 9, 16], frequency=Habit.WEEKLY, created_on=date(2024, 2, 26))

        stats = self.service.compute_stats()

        self.assertEqual(stats.best_streak, 3)
        self.assertEqual(stats.average_streak, 3.0)
        self.assertAlmostEqual(stats.completion_rate, 100.0)

    def test_completion_rate_chart_matches_habit_rates(self):
        read = self.create_habit('Read', completed_days=[0, 1, 2, 3, 4, 5, 6, 7, 8, 9])
        walk = self.create_habit('Walk', completed_days=[0, 3, 6])

        chart = self.service.completion_rate_chart()

        self.assertEqual(chart.labels, ['Read', 'Walk'])
        self.assertEqual(chart.data, [100.0, 30.0])
        rates = {habit.id: progress.completion_rate for habit, progress, _ in self.service.snapshot()}
        self.assertEqual(rates[read.id], 100.0)
        self.assertEqual(rates[walk.id], 30.0)

    def test_streak_chart_orders_by_current_streak(self):
        self.create_habit('Read', completed_days=[1, 2])
        self.create_habit('Walk', completed_days=[0, 1, 2, 3])
        self.create_habit('Write')

        chart = self.service.streak_chart()

        self.assertEqual(chart.labels, ['Walk', 'Read', 'Write'])
        self.assertEqual(chart.data, [4, 2, 0])

    def test_daily_completions_chart(self):
        self.create_habit('Read', completed_days=[0, 1])
        self.create_habit('Walk', completed_days=[0, 40])

        chart = self.service.daily_completions_chart(days=30)

        self.assertEqual(len(chart.labels), 30)
        self.assertEqual(chart.labels[-1], 'Mar 15')
        self.assertEqual(chart.labels[0], 'Feb 15')
        self.assertEqual(chart.data[-1], 2)
        self.assertEqual(chart.data[-2], 1)
        self.assertEqual(sum(chart.data), 3)

    def test_to_dict_shapes(self):
        self.create_habit('Read', completed_days=[0])

        self.assertEqual(
            set(self.service.compute_stats().to_dict()),
            {'total_habits', 'completed_today', 'total_completions', 'average_streak', 'best_streak', 'completion_rate'},
        )
        self.assertEqual(set(self.service.streak_chart().to_dict()), {'labels', 'data'})
