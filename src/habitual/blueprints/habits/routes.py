"""Habit and completion routes."""

from __future__ import annotations

from flask import jsonify, request

from ...errors import NotFoundError
from ...extensions import get_store
from ...logging_config import get_logger
from ...serializers import to_json
from . import bp
from .forms import CompletionForm, HabitForm, HabitUpdateForm

logger = get_logger(__name__)


def _json_body():
    return request.get_json(silent=True)


@bp.get("")
def list_habits():
    """Every habit with its completions and 7-day completion rate."""

    return jsonify(to_json(get_store().get_all_habits()))


@bp.get("/<int:habit_id>")
def get_habit(habit_id: int):
    habit = get_store().get_habit(habit_id)
    if habit is None:
        raise NotFoundError("Habit not found")
    return jsonify(to_json(habit))


@bp.post("")
def create_habit():
    form = HabitForm.parse(_json_body())
    habit = get_store().create_habit(form.to_store())
    return jsonify(to_json(habit)), 201


@bp.put("/<int:habit_id>")
def update_habit(habit_id: int):
    form = HabitUpdateForm.parse(_json_body())
    habit = get_store().update_habit(habit_id, form.to_store())
    if habit is None:
        raise NotFoundError("Habit not found")
    return jsonify(to_json(habit))


@bp.delete("/<int:habit_id>")
def delete_habit(habit_id: int):
    if not get_store().delete_habit(habit_id):
        raise NotFoundError("Habit not found")
    return jsonify({"message": "Habit deleted successfully"})


@bp.get("/completions")
def list_completions():
    return jsonify(to_json(get_store().list_completions()))


@bp.post("/completion")
def track_completion():
    """Mark a habit done or not done for a day; repeated calls update in place."""

    form = CompletionForm.parse(_json_body())
    store = get_store()
    if store.get_habit(form.habit_id) is None:
        raise NotFoundError("Habit not found")

    completion, created = store.upsert_completion(form.habit_id, form.date, form.completed)
    return jsonify(to_json(completion)), 201 if created else 200


@bp.delete("/reset")
def reset_data():
    """Remove every habit and completion. Irreversible."""

    get_store().reset_all_data()
    logger.warning("Habit data reset via API", extra={"remote_addr": request.remote_addr})
    return jsonify({"message": "All habit data has been reset successfully"})
