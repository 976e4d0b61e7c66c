from __future__ import annotations

import math

from flask import Flask, jsonify

from ..common.web import json_body, json_error
from ..core.exceptions import ValidationError
from .pad import PointerEvent, Rect, replay

MAX_SURFACE_SIDE = 4096
MAX_COORDINATE = 1_000_000


def _number(value, message: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(message)
    if not math.isfinite(number) or abs(number) > MAX_COORDINATE:
        raise ValidationError(message)
    return number


def _parse_rect(data) -> Rect:
    if not isinstance(data, dict) or "width" not in data or "height" not in data:
        raise ValidationError("Signature surface needs a numeric width and height.")
    message = "Signature surface needs a numeric width and height."
    rect = Rect(
        left=_number(data.get("left", 0), message),
        top=_number(data.get("top", 0), message),
        width=_number(data["width"], message),
        height=_number(data["height"], message),
    )
    if rect.width < 1 or rect.height < 1:
        raise ValidationError("Signature surface must have a positive size.")
    if rect.width > MAX_SURFACE_SIDE or rect.height > MAX_SURFACE_SIDE:
        raise ValidationError(f"Signature surface may not exceed {MAX_SURFACE_SIDE} pixels per side.")
    return rect


def _parse_event(item) -> PointerEvent:
    if not isinstance(item, dict) or not isinstance(item.get("type"), str) or not item["type"]:
        raise ValidationError("Each event needs a type.")
    message = "Event coordinates must be numbers."
    x = _number(item["x"], message) if item.get("x") is not None else None
    y = _number(item["y"], message) if item.get("y") is not None else None
    return PointerEvent(type=item["type"], client_x=x, client_y=y)


def register(app: Flask) -> None:
    @app.route("/api/signature", methods=["POST"], endpoint="signature")
    def signature():
        """Replay recorded pointer/touch events and return the resulting signature image."""
        try:
            data = json_body()
            events = data.get("events") or []
            if not isinstance(events, list):
                raise ValidationError("Events must be a list.")
            rect = _parse_rect(data.get("rect") or {})
            data_url = replay(rect, [_parse_event(item) for item in events])
        except ValidationError as e:
            return json_error(str(e), 400)

        return jsonify({"success": True, "signatureDataUrl": data_url})
