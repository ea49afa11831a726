# Import all views so urls.py can refer to them as `views.<name>`

from .habit_views import (
    habit_collection,
    habit_detail,
    habit_completion,
    habit_completions,
)

from .stats_views import (
    stats,
    completion_rate_chart,
    streak_chart,
    daily_completions_chart,
    health_check,
)
