from django import forms

from .models import Habit


class HabitForm(forms.ModelForm):
    """Validates habit payloads coming from the JSON API."""

    frequency = forms.ChoiceField(choices=Habit.FREQUENCY_CHOICES, required=False)
    target_count = forms.IntegerField(required=False)

    class Meta:
        model = Habit
        fields = ['name', 'description', 'frequency', 'target_count']

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise forms.ValidationError("Habit name is required.")
        return name

    def clean_description(self):
        return (self.cleaned_data.get('description') or '').strip()

    def clean_frequency(self):
        return self.cleaned_data.get('frequency') or Habit.DAILY

    def clean(self):
        cleaned_data = super().clean()
        frequency = cleaned_data.get('frequency')
        target_count = cleaned_data.get('target_count')

        if 'target_count' in self.errors:
            return cleaned_data

        # Missing or zero means once per period.
        if not target_count:
            target_count = 1

        if target_count < 1:
            self.add_error('target_count', "Target count must be at least 1.")
        elif frequency == Habit.MULTIPLE_TIMES_WEEK and target_count > Habit.MAX_TIMES_PER_WEEK:
            self.add_error(
                'target_count',
                f"Target count must be between 1 and {Habit.MAX_TIMES_PER_WEEK} times per week.",
            )
        elif frequency == Habit.MULTIPLE_TIMES_WEEK:
            cleaned_data['target_count'] = target_count
        else:
            # Only multiple_times_week habits use the target.
            cleaned_data['target_count'] = 1

        return cleaned_data
