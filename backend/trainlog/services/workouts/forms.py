"""
Form reconciliation between persisted workouts and the editable form state.

The form keeps every input as text, the way HTML inputs hold it. Each field
has one explicit rule in each direction:

    field               to_form_state             to_persisted_shape
    date                UTC ISO date              date.fromisoformat
    activityType        copied                    copied
    status              copied                    copied
    *DistanceKm         number -> text            text -> float, blank -> None
    *TimeMin            number -> text            text -> int, blank -> None
    *Pace, description  None -> ""               blank -> None
    weightExercises     rows, or one blank row    rows with name and sets,
                                                  WEIGHT_TRAINING only
"""
import math
import uuid
from datetime import date
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from trainlog.core.exceptions import FormValidationError
from trainlog.models.workout import ActivityType, Status
from trainlog.services.timeline.dates import normalize_date
from trainlog.services.workouts.schemas import ExerciseData, WorkoutData

RUN_FIELDS = (
    "plannedDistanceKm",
    "actualDistanceKm",
    "plannedTimeMin",
    "actualTimeMin",
    "plannedPace",
    "actualPace",
)


class ExerciseRow(BaseModel):
    id: str = ""
    name: str = ""
    sets: str = ""


def _blank_rows() -> List[ExerciseRow]:
    return [ExerciseRow()]


class WorkoutFormData(BaseModel):
    """Editable workout; every input is a string."""
    date: str
    activityType: ActivityType = ActivityType.RUN
    status: Status = Status.PENDING
    plannedDistanceKm: str = ""
    actualDistanceKm: str = ""
    plannedTimeMin: str = ""
    actualTimeMin: str = ""
    plannedPace: str = ""
    actualPace: str = ""
    description: str = ""
    weightExercises: List[ExerciseRow] = Field(default_factory=_blank_rows)


def default_form_state(today: date) -> WorkoutFormData:
    """Blank form for a new workout dated ``today``."""
    return WorkoutFormData(date=today.isoformat())


# ========================================
# Record -> form
# ========================================

def _number_to_text(value: Optional[float]) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _text(value: Optional[str]) -> str:
    return value if value is not None else ""


def to_form_state(record: Any) -> WorkoutFormData:
    """Map a persisted workout snapshot to form state."""
    exercises = [
        ExerciseRow(id=str(ex.id) if ex.id is not None else "", name=ex.name, sets=ex.sets)
        for ex in (record.exercises or ())
    ]
    return WorkoutFormData(
        date=normalize_date(record.date, record.id).isoformat(),
        activityType=record.activity_type,
        status=record.status,
        plannedDistanceKm=_number_to_text(record.planned_distance_km),
        actualDistanceKm=_number_to_text(record.actual_distance_km),
        plannedTimeMin=_number_to_text(record.planned_time_min),
        actualTimeMin=_number_to_text(record.actual_time_min),
        plannedPace=_text(record.planned_pace),
        actualPace=_text(record.actual_pace),
        description=_text(record.description),
        weightExercises=exercises or _blank_rows(),
    )


# ========================================
# Form -> persisted shape
# ========================================

def _parse_float(text: str, field: str) -> Optional[float]:
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text.replace(",", "."))
    except ValueError:
        raise FormValidationError(f"Valor inválido para {field}: {text!r}", field=field) from None
    if not math.isfinite(value) or value < 0:
        raise FormValidationError(f"Valor inválido para {field}: {text!r}", field=field)
    return value


def _parse_int(text: str, field: str) -> Optional[int]:
    text = text.strip()
    if not text:
        return None
    try:
        value = int(text)
    except ValueError:
        raise FormValidationError(f"Valor inválido para {field}: {text!r}", field=field) from None
    if value < 0:
        raise FormValidationError(f"Valor inválido para {field}: {text!r}", field=field)
    return value


def _optional_text(text: str) -> Optional[str]:
    text = text.strip()
    return text or None


def to_persisted_shape(form: WorkoutFormData) -> WorkoutData:
    """
    Convert form state into the shape the store persists.

    Raises:
        FormValidationError: if the date or a numeric field can't be parsed
    """
    try:
        day = date.fromisoformat(form.date.strip())
    except ValueError:
        raise FormValidationError(f"Data inválida: {form.date!r}", field="date") from None

    exercises = None
    if form.activityType is ActivityType.WEIGHT_TRAINING:
        exercises = [
            ExerciseData(id=row.id or None, name=row.name.strip(), sets=row.sets.strip())
            for row in form.weightExercises
            if row.name.strip() and row.sets.strip()
        ]

    values = dict(
        date=day,
        activityType=form.activityType,
        status=form.status,
        description=_optional_text(form.description),
        plannedDistanceKm=_parse_float(form.plannedDistanceKm, "plannedDistanceKm"),
        actualDistanceKm=_parse_float(form.actualDistanceKm, "actualDistanceKm"),
        plannedTimeMin=_parse_int(form.plannedTimeMin, "plannedTimeMin"),
        actualTimeMin=_parse_int(form.actualTimeMin, "actualTimeMin"),
        plannedPace=_optional_text(form.plannedPace),
        actualPace=_optional_text(form.actualPace),
        exercises=exercises,
    )
    try:
        return WorkoutData(**values)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise FormValidationError(f"Valor inválido para {field}: {first['msg']}", field=field) from None


# ========================================
# Form state transitions
# ========================================

def change_type(form: WorkoutFormData, new_type: ActivityType) -> WorkoutFormData:
    """Switch activity type, clearing fields that don't apply to it."""
    new_type = ActivityType(new_type)
    update: dict[str, Any] = {"activityType": new_type}
    if new_type is not ActivityType.RUN:
        update.update({name: "" for name in RUN_FIELDS})
    if new_type is not ActivityType.WEIGHT_TRAINING:
        update["weightExercises"] = _blank_rows()
    return form.model_copy(update=update)


def validate(form: WorkoutFormData) -> Optional[str]:
    """Return a user-facing error message, or None when the form can be saved."""
    if not form.date.strip() or form.activityType is None:
        return "Data e Tipo de Atividade são obrigatórios."
    if form.status is Status.COMPLETED:
        if form.activityType is ActivityType.RUN and not form.actualDistanceKm.strip():
            return "Treino de Corrida concluído deve ter a Distância Real preenchida."
    return None


def add_exercise(form: WorkoutFormData) -> WorkoutFormData:
    rows = form.weightExercises + [ExerciseRow(id=str(uuid.uuid4()))]
    return form.model_copy(update={"weightExercises": rows})


def update_exercise(
    form: WorkoutFormData,
    index: int,
    key: Literal["name", "sets"],
    value: str,
) -> WorkoutFormData:
    rows = [
        row.model_copy(update={key: value}) if i == index else row
        for i, row in enumerate(form.weightExercises)
    ]
    return form.model_copy(update={"weightExercises": rows})


def remove_exercise(form: WorkoutFormData, index: int) -> WorkoutFormData:
    rows = [row for i, row in enumerate(form.weightExercises) if i != index]
    return form.model_copy(update={"weightExercises": rows})
