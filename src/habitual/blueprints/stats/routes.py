"""Statistics routes."""

from __future__ import annotations

from flask import jsonify, request
from pydantic import BaseModel, Field, ValidationError

from ...dates import utc_today
from ...errors import ValidationFailed
from ...extensions import get_store
from ...serializers import to_json
from ...services import statistics
from . import bp


class HeatmapQuery(BaseModel):
    """``?year=&month=`` for the heatmap; both default to the current month."""

    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)


@bp.get("")
def overview():
    return jsonify(to_json(statistics.get_habit_statistics(get_store())))


@bp.get("/weekly")
def weekly():
    return jsonify(to_json(statistics.get_weekly_completion_data(get_store())))


@bp.get("/habits")
def habit_performance():
    return jsonify(to_json(statistics.get_habit_performance(get_store())))


@bp.get("/heatmap")
def heatmap():
    today = utc_today()
    try:
        query = HeatmapQuery.model_validate(
            {
                "year": request.args.get("year") or today.year,
                "month": request.args.get("month") or today.month,
            }
        )
    except ValidationError as exc:
        raise ValidationFailed.from_pydantic(exc) from exc

    data = statistics.get_monthly_heatmap_data(get_store(), query.year, query.month)
    return jsonify(to_json(data))


@bp.get("/trends/<int:habit_id>")
def habit_trends(habit_id: int):
    return jsonify(to_json(statistics.get_habit_trends(get_store(), habit_id)))


@bp.get("/comparison")
def comparison():
    return jsonify(to_json(statistics.get_habit_comparison(get_store())))
