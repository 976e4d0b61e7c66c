from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional

from ..core.constants import SIGNATURE_LINE_WIDTH, SIGNATURE_STROKE_COLOR
from ..core.exceptions import ValidationError
from .surface import RasterSurface

logger = logging.getLogger(__name__)

START_EVENTS = frozenset({"mousedown", "touchstart", "pointerdown"})
MOVE_EVENTS = frozenset({"mousemove", "touchmove", "pointermove"})
END_EVENTS = frozenset({"mouseup", "mouseleave", "touchend", "pointerup", "pointerleave"})
CLEAR_EVENT = "clear"


@dataclass(frozen=True)
class Rect:
    """On-screen bounding rectangle of the drawing surface (client coordinates)."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class PointerEvent:
    type: str
    client_x: Optional[float] = None
    client_y: Optional[float] = None


class PadState(str, Enum):
    IDLE = "idle"
    STROKING = "stroking"


class SignaturePad:
    """Turns pointer/touch samples into a signature image.

    Idle -> Stroking on pointer down; each move while stroking draws a segment
    and marks the surface as inked; pointer up/leave returns to Idle and, if
    the surface has ink, reports the PNG data URI through ``on_end``.
    ``clear`` wipes the surface, reports ``None`` through ``on_end`` and then
    calls ``on_clear``.
    """

    def __init__(
        self,
        *,
        on_end: Callable[[Optional[str]], None],
        on_clear: Callable[[], None],
        surface: Optional[RasterSurface] = None,
        line_width: int = SIGNATURE_LINE_WIDTH,
        stroke_color: str = SIGNATURE_STROKE_COLOR,
    ):
        self._on_end = on_end
        self._on_clear = on_clear
        self._surface = surface or RasterSurface()
        self._line_width = line_width
        self._stroke_color = stroke_color
        self._rect: Optional[Rect] = None
        self._state = PadState.IDLE
        self._last_point: Optional[tuple[float, float]] = None
        self._has_ink = False

    @property
    def state(self) -> PadState:
        return self._state

    @property
    def has_signature(self) -> bool:
        return self._has_ink

    @property
    def surface(self) -> RasterSurface:
        return self._surface

    def mount(self, rect: Rect) -> None:
        """Size the surface to its displayed size and set up the pen."""
        self._rect = rect
        self._surface.resize(int(rect.width), int(rect.height))
        self._surface.set_pen(width=self._line_width, color=self._stroke_color)

    def remeasure(self, rect: Rect) -> None:
        """Re-sync surface size after a layout change, keeping existing ink."""
        if self._rect is None:
            self.mount(rect)
            return
        self._rect = rect
        self._surface.resize(int(rect.width), int(rect.height), keep_content=True)

    def _to_local(self, client_x: float, client_y: float) -> tuple[float, float]:
        if self._rect is None:
            raise RuntimeError("Signature pad is not mounted")
        return client_x - self._rect.left, client_y - self._rect.top

    def pointer_down(self, client_x: float, client_y: float) -> None:
        self._last_point = self._to_local(client_x, client_y)
        self._state = PadState.STROKING

    def pointer_move(self, client_x: float, client_y: float) -> None:
        if self._state != PadState.STROKING:
            return
        point = self._to_local(client_x, client_y)
        self._surface.line(self._last_point, point)
        self._last_point = point
        self._has_ink = True

    def pointer_up(self) -> None:
        if self._state != PadState.STROKING:
            return
        self._state = PadState.IDLE
        self._last_point = None
        if self._has_ink:
            self._on_end(self._surface.to_data_url())

    def clear(self) -> None:
        self._surface.clear()
        self._state = PadState.IDLE
        self._last_point = None
        self._has_ink = False
        self._on_end(None)
        self._on_clear()

    def handle(self, event: PointerEvent) -> None:
        """Dispatch a browser-style event (mousedown, touchmove, mouseleave, ...)."""
        kind = event.type
        if kind in START_EVENTS or kind in MOVE_EVENTS:
            if event.client_x is None or event.client_y is None:
                raise ValidationError(f"Event {kind!r} needs coordinates.")
            if kind in START_EVENTS:
                self.pointer_down(event.client_x, event.client_y)
            else:
                self.pointer_move(event.client_x, event.client_y)
        elif kind in END_EVENTS:
            self.pointer_up()
        elif kind == CLEAR_EVENT:
            self.clear()
        else:
            raise ValidationError(f"Unsupported pointer event: {kind!r}")


def replay(rect: Rect, events: Iterable[PointerEvent]) -> Optional[str]:
    """Run a recorded event stream through a fresh pad; return the last reported artifact."""
    result: dict[str, Optional[str]] = {"data_url": None}

    def on_end(data_url: Optional[str]) -> None:
        result["data_url"] = data_url

    pad = SignaturePad(on_end=on_end, on_clear=lambda: None)
    pad.mount(rect)
    count = 0
    for event in events:
        pad.handle(event)
        count += 1

    logger.debug("Replayed %d signature events (inked=%s)", count, pad.has_signature)
    return result["data_url"]
