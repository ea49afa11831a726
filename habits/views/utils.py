import functools
import json
import logging

from django.http import JsonResponse

from ..exceptions import HabitError, ValidationError

logger = logging.getLogger(__name__)


def json_api(view):
    """Turn HabitError subclasses into JSON error responses; anything else becomes a logged 500."""
    @functools.wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except HabitError as e:
            logger.info(f"{request.method} {request.path} -> {e.status} {e.code}: {e.message}")
            return JsonResponse(e.to_dict(), status=e.status)
        except Exception:
            logger.exception(f"Unhandled error in {request.method} {request.path}")
            return JsonResponse(
                {'error': {'code': 'internal_error', 'message': 'Internal server error', 'details': {}}},
                status=500,
            )
    return wrapper


def parse_json_body(request, required=True):
    """
    Decode a JSON request body. Unless ``required``, an empty or non-JSON
    body (form posts, bare POSTs from the test client) is {}.
    """
    if not required and request.content_type != 'application/json':
        return {}
    if not request.body:
        if required:
            raise ValidationError("Request body is required")
        return {}
    try:
        return json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError("Invalid request body")


def habit_to_dict(habit, progress):
    return {
        'id': habit.id,
        'name': habit.name,
        'description': habit.description,
        'frequency': habit.frequency,
        'target_count': habit.target_count,
        'created_at': habit.created_at.isoformat(),
        'updated_at': habit.updated_at.isoformat(),
        'current_streak': progress.current_streak,
        'longest_streak': progress.longest_streak,
        'completion_rate': round(progress.completion_rate, 1),
        'is_completed_today': progress.is_completed_today,
    }
