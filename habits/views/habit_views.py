from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from ..services.completion_ledger import CompletionLedger
from ..services.habit_store import HabitStore
from ..services.stats_service import StatsService
from ..services.streak_engine import StreakEngine
from .utils import habit_to_dict, json_api, parse_json_body


def _habit_response(habit, status=200):
    progress = StreakEngine().progress(habit)
    return JsonResponse(habit_to_dict(habit, progress), status=status)


@csrf_exempt
@require_http_methods(['GET', 'POST'])
@json_api
def habit_collection(request):
    """List habits in creation order, or create one."""
    store = HabitStore()

    if request.method == 'POST':
        habit = store.create(parse_json_body(request))
        return _habit_response(habit, status=201)

    habits = [habit_to_dict(habit, progress) for habit, progress, _ in StatsService().snapshot()]
    return JsonResponse(habits, safe=False)


@csrf_exempt
@require_http_methods(['GET', 'PUT', 'DELETE'])
@json_api
def habit_detail(request, habit_id):
    store = HabitStore()

    if request.method == 'PUT':
        habit = store.update(habit_id, parse_json_body(request))
        return _habit_response(habit)

    if request.method == 'DELETE':
        store.delete(habit_id)
        return HttpResponse(status=204)

    return _habit_response(store.get(habit_id))


@csrf_exempt
@require_http_methods(['POST', 'DELETE'])
@json_api
def habit_completion(request, habit_id):
    """Mark a habit done (POST) or not done (DELETE) for today, or for the optional body date."""
    ledger = CompletionLedger()
    body = parse_json_body(request, required=False)
    on = body.get('date') if isinstance(body, dict) else None

    if request.method == 'POST':
        ledger.complete(habit_id, on)
        message = 'Habit completed successfully'
    else:
        ledger.uncomplete(habit_id, on)
        message = 'Habit uncompleted successfully'

    return JsonResponse({'message': message, 'habit_id': habit_id})


@require_GET
@json_api
def habit_completions(request, habit_id):
    dates = CompletionLedger().completions_for(habit_id)
    return JsonResponse({
        'habit_id': habit_id,
        'dates': [d.isoformat() for d in dates],
    })
