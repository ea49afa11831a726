from django.core.management.base import BaseCommand
from habits.services.stats_service import StatsService


class Command(BaseCommand):
    help = 'Print aggregate statistics and per-habit streaks'

    def handle(self, *args, **options):
        service = StatsService()
        rows = service.snapshot()

        if not rows:
            self.stdout.write("No habits found")
            return

        self.stdout.write(f"Today: {service.clock.today()}")
        self.stdout.write("\n=== Habits ===")
        for habit, progress, completions in rows:
            done = "done" if progress.is_completed_today else "pending"
            self.stdout.write(f"\n{habit.name} (#{habit.id}, {habit.frequency})")
            self.stdout.write(f"  Today: {done}")
            self.stdout.write(f"  Current streak: {progress.current_streak}")
            self.stdout.write(f"  Longest streak: {progress.longest_streak}")
            self.stdout.write(f"  Completion rate: {progress.completion_rate:.1f}%")
            self.stdout.write(f"  Completions: {completions}")

        stats = service.compute_stats()
        self.stdout.write("\n=== Summary ===")
        self.stdout.write(f"Total habits: {stats.total_habits}")
        self.stdout.write(f"Completed today: {stats.completed_today}")
        self.stdout.write(f"Total completions: {stats.total_completions}")
        self.stdout.write(f"Average streak: {stats.average_streak:.1f}")
        self.stdout.write(f"Best streak: {stats.best_streak}")
        self.stdout.write(f"Completion rate: {stats.completion_rate:.1f}%")
