"""Settings routes."""

from __future__ import annotations

from flask import jsonify, request

from ...logging_config import get_logger
from . import bp
from .forms import SettingsForm

logger = get_logger(__name__)


@bp.post("")
def save_settings():
    """Validate reminder settings.

    Reminders are never delivered, so the values are only acknowledged.
    """

    form = SettingsForm.parse(request.get_json(silent=True))
    logger.info("Settings received", extra={"notifications": form.notifications})
    return jsonify(
        {
            "message": "Settings saved successfully",
            "settings": form.model_dump(by_alias=True),
        }
    )
