"""
Error taxonomy for the habit service.

Services raise these; the JSON views turn them into HTTP responses.
"""


class HabitError(Exception):
    """Base class for errors the API reports to clients."""
    status = 500
    code = 'internal_error'

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self):
        return {
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details,
            }
        }


class ValidationError(HabitError):
    """Bad input: empty name, target out of range, future-dated completion."""
    status = 400
    code = 'validation_error'


class NotFound(HabitError):
    """Unknown habit id."""
    status = 404
    code = 'not_found'

    def __init__(self, habit_id):
        super().__init__(f"Habit {habit_id} not found", {'habit_id': habit_id})
        self.habit_id = habit_id


class ConflictError(HabitError):
    """A concurrent mutation left the ledger in a state we could not reconcile."""
    status = 409
    code = 'conflict'
