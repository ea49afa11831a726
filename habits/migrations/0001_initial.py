# Generated manually for habit tracking models

import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Habit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='What habit do you want to track?', max_length=255)),
                ('description', models.TextField(blank=True, default='', help_text='Additional details about your habit')),
                ('frequency', models.CharField(choices=[('daily', 'Daily'), ('weekly', 'Weekly'), ('multiple_times_week', 'Multiple times a week')], default='daily', max_length=20)),
                ('target_count', models.PositiveIntegerField(default=1, help_text='Times per week; only used for multiple_times_week habits', validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(7)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['created_at', 'id'],
                'indexes': [models.Index(fields=['frequency'], name='habit_frequency_idx')],
            },
        ),
        migrations.CreateModel(
            name='Completion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('completed_on', models.DateField(help_text='Date when the habit was performed')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('habit', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='completions', to='habits.habit')),
            ],
            options={
                'ordering': ['completed_on'],
                'indexes': [models.Index(fields=['completed_on'], name='completion_date_idx')],
                'constraints': [models.UniqueConstraint(fields=('habit', 'completed_on'), name='unique_completion_per_habit_per_day')],
            },
        ),
    ]
