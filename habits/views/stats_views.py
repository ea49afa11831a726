from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from ..exceptions import ValidationError
from ..services.stats_service import MAX_CHART_DAYS, StatsService
from .utils import json_api


@require_GET
@json_api
def stats(request):
    return JsonResponse(StatsService().compute_stats().to_dict())


@require_GET
@json_api
def completion_rate_chart(request):
    """Per-habit completion rates, same figures as the habit list."""
    return JsonResponse(StatsService().completion_rate_chart().to_dict())


@require_GET
@json_api
def streak_chart(request):
    """Current streak per habit, longest first."""
    return JsonResponse(StatsService().streak_chart().to_dict())


@require_GET
@json_api
def daily_completions_chart(request):
    try:
        days = int(request.GET.get('days', 30))
    except ValueError:
        raise ValidationError("days must be an integer", {'days': request.GET.get('days')})
    if not 1 <= days <= MAX_CHART_DAYS:
        raise ValidationError(f"days must be between 1 and {MAX_CHART_DAYS}", {'days': days})

    return JsonResponse(StatsService().daily_completions_chart(days).to_dict())


@require_GET
def health_check(request):
    return JsonResponse({
        'status': 'healthy',
        'time': timezone.now().replace(microsecond=0).isoformat(),
    })
