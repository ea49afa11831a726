from django.core.management.base import BaseCommand
from habits.models import Habit, Completion
from habits.services.completion_ledger import CompletionLedger
from habits.services.habit_store import HabitStore
from datetime import timedelta
import random


DEMO_HABITS = [
    {
        'name': 'Morning run',
        'description': '5km around the park before work',
        'frequency': Habit.DAILY,
        'chance': 0.8,
    },
    {
        'name': 'Read 20 pages',
        'description': 'Any book, no phones',
        'frequency': Habit.DAILY,
        'chance': 0.6,
    },
    {
        'name': 'Gym',
        'description': 'Strength training',
        'frequency': Habit.MULTIPLE_TIMES_WEEK,
        'target_count': 3,
        'chance': 0.45,
    },
    {
        'name': 'Call parents',
        'description': '',
        'frequency': Habit.WEEKLY,
        'chance': 0.2,
    },
]


class Command(BaseCommand):
    help = 'Create demo habits with a history of completions'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=60,
            help='How many days of completion history to generate (default 60)',
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete all habits before creating demo data',
        )
        parser.add_argument(
            '--seed',
            type=int,
            default=None,
            help='Random seed for reproducible history',
        )

    def handle(self, *args, **options):
        days = options['days']
        if days < 0:
            self.stdout.write(self.style.ERROR("--days must not be negative"))
            return

        if options['clear']:
            removed = Completion.objects.count()
            Habit.objects.all().delete()
            self.stdout.write(f"Cleared existing habits ({removed} completions)")

        rng = random.Random(options['seed'])
        store = HabitStore()
        ledger = CompletionLedger()
        today = ledger.clock.today()

        for demo in DEMO_HABITS:
            data = {key: value for key, value in demo.items() if key != 'chance'}
            habit = store.create(data)

            recorded = 0
            for offset in range(days, 0, -1):
                if rng.random() < demo['chance']:
                    ledger.complete(habit.id, today - timedelta(days=offset))
                    recorded += 1

            self.stdout.write(f"✓ {habit.name}: {recorded} completions")

        self.stdout.write(self.style.SUCCESS(f"Created {len(DEMO_HABITS)} demo habits"))
