from datetime import date, timedelta
from unittest.mock import patch

from django.db import IntegrityError
from django.test import TestCase

from habits.clock import FixedClock
from habits.exceptions import ConflictError, NotFound, ValidationError
from habits.models import Habit, Completion
from habits.services.completion_ledger import CompletionLedger


class CompletionLedgerTestCase(TestCase):
    """Test cases for recording and removing habit completions."""

    def setUp(self):
        self.today = date(2024, 3, 15)
        self.ledger = CompletionLedger(clock=FixedClock(self.today))
        self.habit = Habit.objects.create(name='Read')

    def test_complete_defaults_to_today(self):
        completion = self.ledger.complete(self.habit.id)

        self.assertEqual(completion.completed_on, self.today)
        self.assertTrue(self.ledger.is_completed(self.habit.id))

    def test_complete_twice_is_idempotent(self):
        first = self.ledger.complete(self.habit.id)
        second = self.ledger.complete(self.habit.id)

        self.assertEqual(first.id, second.id)
        self.assertEqual(Completion.objects.filter(habit=self.habit).count(), 1)

    def test_complete_with_status_reports_creation(self):
        _, created = self.ledger.complete_with_status(self.habit.id)
        self.assertTrue(created)
        _, created = self.ledger.complete_with_status(self.habit.id)
        self.assertFalse(created)

    def test_complete_then_uncomplete_restores_empty_ledger(self):
        self.ledger.complete(self.habit.id)

        self.assertTrue(self.ledger.uncomplete(self.habit.id))
        self.assertEqual(self.ledger.completions_for(self.habit.id), [])

    def test_uncomplete_without_entry_is_noop(self):
        self.ledger.complete(self.habit.id, self.today - timedelta(days=1))

        self.assertFalse(self.ledger.uncomplete(self.habit.id))
        self.assertEqual(self.ledger.completions_for(self.habit.id), [self.today - timedelta(days=1)])

    def test_future_completion_is_rejected(self):
        with self.assertRaises(ValidationError):
            self.ledger.complete(self.habit.id, self.today + timedelta(days=1))
        self.assertFalse(Completion.objects.exists())

    def test_past_completion_is_allowed(self):
        completion = self.ledger.complete(self.habit.id, '2024-03-10')
        self.assertEqual(completion.completed_on, date(2024, 3, 10))

    def test_invalid_date_string(self):
        with self.assertRaises(ValidationError):
            self.ledger.complete(self.habit.id, 'yesterday')
        with self.assertRaises(ValidationError):
            self.ledger.complete(self.habit.id, '2024-02-30')

    def test_unknown_habit(self):
        with self.assertRaises(NotFound):
            self.ledger.complete(9999)
        with self.assertRaises(NotFound):
            self.ledger.uncomplete(9999)
        with self.assertRaises(NotFound):
            self.ledger.completions_for(9999)

    def test_completions_for_is_ascending(self):
        for offset in (3, 0, 7, 1):
            self.ledger.complete(self.habit.id, self.today - timedelta(days=offset))

        self.assertEqual(
            self.ledger.completions_for(self.habit.id),
            [date(2024, 3, 8), date(2024, 3, 12), date(2024, 3, 14), date(2024, 3, 15)],
        )

    def test_completions_by_habit(self):
        other = Habit.objects.create(name='Walk')
        self.ledger.complete(self.habit.id)
        self.ledger.complete(other.id, '2024-03-01')
        self.ledger.complete(other.id, '2024-02-01')

        by_habit = self.ledger.completions_by_habit()

        self.assertEqual(by_habit[self.habit.id], [self.today])
        self.assertEqual(by_habit[other.id], [date(2024, 2, 1), date(2024, 3, 1)])

    def test_count_by_date(self):
        other = Habit.objects.create(name='Walk')
        self.ledger.complete(self.habit.id)
        self.ledger.complete(other.id)
        self.ledger.complete(other.id, '2024-03-14')
        self.ledger.complete(other.id, '2024-01-01')

        counts = self.ledger.count_by_date(date(2024, 3, 1), self.today)

        self.assertEqual(counts, {self.today: 2, date(2024, 3, 14): 1})

    def test_integrity_error_becomes_conflict(self):
        with patch.object(Completion.objects, 'get_or_create', side_effect=IntegrityError('duplicate')):
            with self.assertRaises(ConflictError):
                self.ledger.complete(self.habit.id)

    def test_deleting_habit_removes_completions(self):
        self.ledger.complete(self.habit.id)
        self.ledger.complete(self.habit.id, '2024-03-14')

        self.habit.delete()

        self.assertFalse(Completion.objects.exists())
