"""
Buffer parsing with a per-buffer cache.

`Parser.parse(buffer)` returns a `ParsedModule` for the buffer's current
text. Outcomes are cached by buffer id and evicted when the buffer events
hub reports a change to that buffer. Malformed source never raises: it is
cached as a `FailedParse` and every query on it returns an empty list.
"""

import logging
import threading
from typing import Dict, List, Optional

from . import query
from .buffers import Buffer, BufferEvents, Subscription, buffer_events
from .javascript_adapter import JavaScriptAdapter
from .types import (
    FAILED_PARSE, FailedParse, ImportDeclaration, ParseOutcome, SuccessfulParse,
)

logger = logging.getLogger(__name__)


class ParsedModule:
    """Query facade over one buffer's parse outcome."""

    def __init__(self, buffer: Optional[Buffer], outcome: ParseOutcome):
        self.buffer = buffer
        self.outcome = outcome

    @property
    def failed(self) -> bool:
        return isinstance(self.outcome, FailedParse)

    def get_imports(self) -> List[ImportDeclaration]:
        return query.get_all_imports(self.outcome)

    def get_imports_for_module(self, target_module: str) -> List[ImportDeclaration]:
        return query.get_imports_for_module(self.outcome, target_module)

    def get_exported_names(self) -> List[str]:
        return query.get_exported_names(self.outcome)


class Parser:
    """Parses buffers and memoizes the outcome per buffer id."""

    def __init__(self, events: Optional[BufferEvents] = None,
                 adapter: Optional[JavaScriptAdapter] = None):
        self._adapter = adapter or JavaScriptAdapter()
        self._cache: Dict[int, ParseOutcome] = {}
        self._lock = threading.RLock()
        self._subscription: Optional[Subscription] = None
        if events is not None:
            self._subscription = events.subscribe(self.invalidate)

    def parse_text(self, text: str) -> ParseOutcome:
        """Parse text without touching the cache."""
        try:
            tree = self._adapter.parse(text)
        except UnicodeEncodeError:
            logger.debug("Source is not encodable as UTF-8; treating as failed parse")
            return FailedParse("source is not encodable as UTF-8")
        if tree is None:
            return FailedParse("JavaScript parser unavailable")
        if tree.root_node.has_error:
            logger.debug("Source has syntax errors; treating as failed parse")
            return FAILED_PARSE

        return SuccessfulParse(
            tree=tree,
            comments=tuple(self._adapter.comments(tree)),
            tokens=tuple(self._adapter.tokens(tree)),
            text=text,
        )

    def _try_parse(self, buffer: Buffer) -> ParseOutcome:
        with self._lock:
            cached = self._cache.get(buffer.buffer_id)
            if cached is not None:
                return cached

            outcome = self.parse_text(buffer.get_text())
            self._cache[buffer.buffer_id] = outcome
            return outcome

    def parse(self, buffer: Buffer) -> ParsedModule:
        return ParsedModule(buffer, self._try_parse(buffer))

    def invalidate(self, buffer_id: int) -> None:
        """Drop the cached outcome of one buffer."""
        with self._lock:
            self._cache.pop(buffer_id, None)

    def is_cached(self, buffer_id: int) -> bool:
        with self._lock:
            return buffer_id in self._cache

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def dispose(self) -> None:
        """Stop listening for changes and release every cache entry."""
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
        self.clear()


# Shared parser listening on the process-wide buffer events hub
default_parser = Parser(buffer_events)
