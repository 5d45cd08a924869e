# runlog/errors.py
"""
Errores de dominio. create_app registra un handler que los devuelve como
JSON {"error_code", "message"} con su status HTTP.
"""


class ApiError(Exception):
    status_code = 500
    error_code = "ServerError"

    def __init__(self, message: str, status_code: int = None, error_code: str = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "message": self.message}


class ValidationError(ApiError):
    status_code = 400
    error_code = "ValidationError"


class DuplicateDayError(ValidationError):
    error_code = "DuplicateDay"

    def __init__(self, day: str):
        super().__init__(f"Duplicate day {day} in plan")
        self.day = day


class NotFoundError(ApiError):
    status_code = 404
    error_code = "NotFound"


class WorkoutNotFoundError(NotFoundError):
    error_code = "WorkoutNotFound"

    def __init__(self, workout_id):
        super().__init__(f"Workout {workout_id} not found")
        self.workout_id = workout_id


class ForbiddenError(ApiError):
    status_code = 403
    error_code = "Forbidden"
