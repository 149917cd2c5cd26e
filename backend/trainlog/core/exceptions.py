"""
Error taxonomy.

Engine errors are raised synchronously to the caller. Persistence failures
are not exceptions: the store reports them as failed results, and the API
layer turns a missing record into WorkoutNotFoundError.
"""


class TrainlogError(Exception):
    """Base class for application errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRecordError(TrainlogError):
    """A workout record has a missing or malformed date."""

    status_code = 422

    def __init__(self, message: str, record_id: object = None):
        super().__init__(message)
        self.record_id = record_id


class InvalidParameterError(TrainlogError):
    """An unrecognized timeframe, metric, locale or period was requested."""

    status_code = 422


class FormValidationError(TrainlogError):
    """A form field could not be converted to its persisted type."""

    status_code = 422

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class WorkoutNotFoundError(TrainlogError):
    status_code = 404

    def __init__(self, workout_id: object):
        super().__init__(f"Treino {workout_id} não encontrado.")
        self.workout_id = workout_id
