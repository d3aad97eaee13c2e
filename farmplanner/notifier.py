"""
RenderNotifier: one-way signals from the placement core to a renderer.

The core never draws. It tells whoever is listening that something changed and
the listener decides how to redraw. Three channels, by frequency:

- ``changed(location_key)``: committed placement data changed (place/remove/move,
  snapped-back drop, location switch, layout load). Redraw placements.
- ``preview(DragPreview | None)``: live ghost-rectangle for an Armed drag, fired on
  every pointer move. ``None`` clears the ghost.
- ``cursor(CursorStyle)``: drag started/ended visual cue.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from .logging_utils import LOG_TAG_ERROR, log_error
from .schemas import CursorStyle, DragPreview


ChangedListener = Callable[[str], None]
PreviewListener = Callable[[Optional[DragPreview]], None]
CursorListener = Callable[[CursorStyle], None]


class RenderNotifier(ABC):
    """Observer interface injected into PlacementStore, DragSession and EditorSession."""

    @abstractmethod
    def changed(self, location_key: str) -> None:
        pass

    @abstractmethod
    def preview(self, preview: Optional[DragPreview]) -> None:
        pass

    @abstractmethod
    def cursor(self, style: CursorStyle) -> None:
        pass


class NullNotifier(RenderNotifier):
    """Discards every signal (headless use, batch edits)."""

    def changed(self, location_key: str) -> None:
        return None

    def preview(self, preview: Optional[DragPreview]) -> None:
        return None

    def cursor(self, style: CursorStyle) -> None:
        return None


class ListenerNotifier(RenderNotifier):
    """Fans signals out to registered callables.

    Listener failures are logged but never propagate: a broken redraw hook must not
    abort a placement that has already been committed.
    """

    def __init__(
        self,
        changed_listeners: Optional[List[ChangedListener]] = None,
        preview_listeners: Optional[List[PreviewListener]] = None,
        cursor_listeners: Optional[List[CursorListener]] = None,
    ):
        self.changed_listeners = changed_listeners or []
        self.preview_listeners = preview_listeners or []
        self.cursor_listeners = cursor_listeners or []

    def on_changed(self, listener: ChangedListener) -> None:
        self.changed_listeners.append(listener)

    def on_preview(self, listener: PreviewListener) -> None:
        self.preview_listeners.append(listener)

    def on_cursor(self, listener: CursorListener) -> None:
        self.cursor_listeners.append(listener)

    def changed(self, location_key: str) -> None:
        self._dispatch("changed", self.changed_listeners, location_key)

    def preview(self, preview: Optional[DragPreview]) -> None:
        self._dispatch("preview", self.preview_listeners, preview)

    def cursor(self, style: CursorStyle) -> None:
        self._dispatch("cursor", self.cursor_listeners, style)

    @staticmethod
    def _dispatch(channel: str, listeners: List[Callable], payload) -> None:
        for listener in listeners:
            try:
                listener(payload)
            except Exception as exc:
                log_error(f"  {LOG_TAG_ERROR} [Render] {channel} listener failed: {exc}")


class RecordingNotifier(RenderNotifier):
    """Keeps every signal in order. Handy for tests and replaying a session."""

    def __init__(self):
        self.events: List[tuple] = []

    def changed(self, location_key: str) -> None:
        self.events.append(("changed", location_key))

    def preview(self, preview: Optional[DragPreview]) -> None:
        self.events.append(("preview", preview))

    def cursor(self, style: CursorStyle) -> None:
        self.events.append(("cursor", style))

    def of(self, channel: str) -> list:
        """Payloads emitted on ``channel`` in order."""
        return [payload for name, payload in self.events if name == channel]

    def clear(self) -> None:
        self.events.clear()
