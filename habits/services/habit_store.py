import logging
from typing import List

from django.db import transaction
from django.forms.models import model_to_dict

from ..exceptions import NotFound, ValidationError
from ..forms import HabitForm
from ..models import Habit

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ['name', 'description', 'frequency', 'target_count']


class HabitStore:
    """Create, read, update and delete habits."""

    def create(self, data) -> Habit:
        form = HabitForm(self._editable(data))
        habit = self._save(form)
        logger.info(f"Habit created: id={habit.id} name={habit.name!r} frequency={habit.frequency}")
        return habit

    def get(self, habit_id) -> Habit:
        try:
            return Habit.objects.get(pk=habit_id)
        except Habit.DoesNotExist:
            raise NotFound(habit_id)

    def list(self) -> List[Habit]:
        return list(Habit.objects.order_by('created_at', 'id'))

    def update(self, habit_id, data) -> Habit:
        """Merge the provided fields over the stored habit and re-validate."""
        changes = self._editable(data)
        with transaction.atomic():
            habit = self._lock(habit_id)
            merged = {**model_to_dict(habit, fields=EDITABLE_FIELDS), **changes}
            if changes.get('frequency', habit.frequency) != habit.frequency and 'target_count' not in changes:
                # A target only carries over between multiple_times_week habits.
                merged.pop('target_count')
            habit = self._save(HabitForm(merged, instance=habit))

        logger.info(f"Habit updated: id={habit.id} fields={sorted(changes)}")
        return habit

    def delete(self, habit_id) -> int:
        """Delete a habit and its completions. Returns the number of completions removed."""
        with transaction.atomic():
            habit = self._lock(habit_id)
            removed = habit.completions.count()
            habit.delete()

        logger.info(f"Habit deleted: id={habit_id} completions_removed={removed}")
        return removed

    def _lock(self, habit_id) -> Habit:
        try:
            return Habit.objects.select_for_update().get(pk=habit_id)
        except Habit.DoesNotExist:
            raise NotFound(habit_id)

    def _save(self, form: HabitForm) -> Habit:
        if not form.is_valid():
            errors = {field: [str(message) for message in messages] for field, messages in form.errors.items()}
            raise ValidationError("Invalid habit", errors)
        return form.save()

    @staticmethod
    def _editable(data) -> dict:
        if not isinstance(data, dict):
            raise ValidationError("Habit payload must be a JSON object")
        # Streak and rate fields are derived; anything else a client sends is ignored.
        return {key: value for key, value in data.items() if key in EDITABLE_FIELDS}
