from django.urls import path
from . import views

app_name = 'habits'

# No trailing slashes: the frontend calls /api/habits, /api/habits/1/complete, ...
urlpatterns = [
    # Habits
    path('habits', views.habit_collection, name='habit_collection'),
    path('habits/<int:habit_id>', views.habit_detail, name='habit_detail'),
    path('habits/<int:habit_id>/complete', views.habit_completion, name='habit_completion'),
    path('habits/<int:habit_id>/completions', views.habit_completions, name='habit_completions'),

    # Statistics
    path('stats', views.stats, name='stats'),

    # Charts
    path('charts/completion-rates', views.completion_rate_chart, name='completion_rate_chart'),
    path('charts/streaks', views.streak_chart, name='streak_chart'),
    path('charts/daily-completions', views.daily_completions_chart, name='daily_completions_chart'),
]
