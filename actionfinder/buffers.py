"""
Host buffer boundary.

The engine only needs three things from an editor: the full text of a
buffer, the text of one line, and a notification when a buffer changes.
`TextBuffer` is an in-memory implementation used by the CLI and the tests;
editor integrations provide their own objects satisfying `Buffer`.
"""

import itertools
import logging
import threading
from typing import Callable, Dict, List, Optional, Protocol

from .types import Edit, InsertEdit, NoOpEdit, Position, ReplaceEdit

logger = logging.getLogger(__name__)

ChangeListener = Callable[[int], None]

_buffer_ids = itertools.count(1)


class Buffer(Protocol):
    """Minimal read interface the engine needs from a host document."""

    @property
    def buffer_id(self) -> int: ...

    @property
    def file_path(self) -> Optional[str]: ...

    def get_text(self) -> str: ...

    def get_line_text(self, line: int) -> str: ...


class Subscription:
    """Handle returned by `BufferEvents.subscribe`."""

    def __init__(self, events: "BufferEvents", token: int):
        self._events = events
        self._token = token
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._events._unsubscribe(self._token)


class BufferEvents:
    """Fan-out of "buffer changed" notifications, keyed by buffer id."""

    def __init__(self):
        self._listeners: Dict[int, ChangeListener] = {}
        self._tokens = itertools.count()
        self._lock = threading.Lock()

    def subscribe(self, listener: ChangeListener) -> Subscription:
        with self._lock:
            token = next(self._tokens)
            self._listeners[token] = listener
        return Subscription(self, token)

    def _unsubscribe(self, token: int) -> None:
        with self._lock:
            self._listeners.pop(token, None)

    def publish(self, buffer_id: int) -> None:
        with self._lock:
            listeners = list(self._listeners.values())
        for listener in listeners:
            listener(buffer_id)

    def __len__(self) -> int:
        return len(self._listeners)


# Process-wide hub used when no other is supplied
buffer_events = BufferEvents()


class TextBuffer:
    """An in-memory document with a stable identity."""

    def __init__(self, text: str = "", file_path: Optional[str] = None,
                 events: Optional[BufferEvents] = None):
        self._text = text
        self._file_path = file_path
        self._events = events if events is not None else buffer_events
        self._buffer_id = next(_buffer_ids)

    @classmethod
    def from_file(cls, file_path: str, events: Optional[BufferEvents] = None) -> "TextBuffer":
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            return cls(f.read(), file_path=file_path, events=events)

    @property
    def buffer_id(self) -> int:
        return self._buffer_id

    @property
    def file_path(self) -> Optional[str]:
        return self._file_path

    def get_text(self) -> str:
        return self._text

    def get_line_text(self, line: int) -> str:
        lines = self._text.split("\n")
        if line < 0 or line >= len(lines):
            return ""
        return lines[line].rstrip("\r")

    def set_text(self, text: str) -> None:
        self._text = text
        self._events.publish(self._buffer_id)

    def apply(self, edit: Edit) -> None:
        """Apply an edit produced by the planner to this buffer."""
        if isinstance(edit, NoOpEdit):
            return
        self.set_text(apply_edit(self._text, edit))

    def __repr__(self) -> str:
        return f"TextBuffer(id={self._buffer_id}, file_path={self._file_path!r})"


def _offset(lines: List[str], position: Position) -> int:
    """Convert a 0-based line/character position to a string offset."""
    line = min(max(position.line, 0), len(lines) - 1)
    offset = sum(len(l) + 1 for l in lines[:line])
    return offset + min(max(position.character, 0), len(lines[line]))


def apply_edit(text: str, edit: Edit) -> str:
    """Return `text` with `edit` applied."""
    if isinstance(edit, NoOpEdit):
        return text

    lines = text.split("\n")
    if isinstance(edit, InsertEdit):
        at = _offset(lines, edit.position)
        return text[:at] + edit.text + text[at:]
    if isinstance(edit, ReplaceEdit):
        start = _offset(lines, edit.range.start)
        end = _offset(lines, edit.range.end)
        return text[:start] + edit.text + text[end:]

    raise TypeError(f"Unknown edit type: {type(edit).__name__}")
