from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


# Habit Tracking Models

class Habit(models.Model):
    """A tracked recurring activity with a target frequency."""

    DAILY = 'daily'
    WEEKLY = 'weekly'
    MULTIPLE_TIMES_WEEK = 'multiple_times_week'

    FREQUENCY_CHOICES = [
        (DAILY, 'Daily'),
        (WEEKLY, 'Weekly'),
        (MULTIPLE_TIMES_WEEK, 'Multiple times a week'),
    ]

    MAX_TIMES_PER_WEEK = 7

    name = models.CharField(max_length=255, help_text="What habit do you want to track?")
    description = models.TextField(blank=True, default='', help_text="Additional details about your habit")
    frequency = models.CharField(max_length=20, choices=FREQUENCY_CHOICES, default=DAILY)
    target_count = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(MAX_TIMES_PER_WEEK)],
        help_text="Times per week; only used for multiple_times_week habits",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['frequency'], name='habit_frequency_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_frequency_display()})"

    @property
    def is_weekly(self):
        return self.frequency in (self.WEEKLY, self.MULTIPLE_TIMES_WEEK)

    @property
    def weekly_target(self):
        """Completions a week needs before it counts toward a streak."""
        if self.frequency == self.MULTIPLE_TIMES_WEEK:
            return self.target_count
        return 1


class Completion(models.Model):
    """A habit performed on a given calendar date."""

    habit = models.ForeignKey(Habit, on_delete=models.CASCADE, related_name='completions')
    completed_on = models.DateField(help_text="Date when the habit was performed")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['completed_on']
        constraints = [
            models.UniqueConstraint(fields=['habit', 'completed_on'], name='unique_completion_per_habit_per_day'),
        ]
        indexes = [
            models.Index(fields=['completed_on'], name='completion_date_idx'),
        ]

    def __str__(self):
        return f"{self.habit.name} @ {self.completed_on}"
