"""
The actionfinder session: configuration, discovery and completion wired
around one parser that listens for buffer changes.
"""

import logging
import os
from typing import List, Optional

from .buffers import BufferEvents, buffer_events
from .completion import ActionCompleter
from .config import ActionFinderConfig, find_config_file, load_config
from .discovery import FileFinder, GlobFileFinder, Notify, get_actions
from .exports import ExportStrategy, default_strategies
from .import_name import ImportNameRecord
from .parser import Parser

logger = logging.getLogger(__name__)


class ActionFinder:
    """Owns the parser subscription; `dispose()` releases it."""

    def __init__(self, config: Optional[ActionFinderConfig] = None,
                 finder: Optional[FileFinder] = None,
                 events: Optional[BufferEvents] = None,
                 extra_node_paths: Optional[List[str]] = None):
        self.config = config or ActionFinderConfig()
        self.finder = finder or GlobFileFinder(".")
        self.parser = Parser(events if events is not None else buffer_events)
        self.extra_node_paths = list(extra_node_paths or [])
        self.records: List[ImportNameRecord] = []
        self.completer = ActionCompleter([], self.parser, self.config.trigger)
        self._disposed = False

    @classmethod
    def for_workspace(cls, root: str, config_path: Optional[str] = None, **kwargs) -> "ActionFinder":
        """Session for a workspace directory, reading its config file if any."""
        config_path = config_path or find_config_file(root)
        if config_path:
            logger.info("Using configuration from %s", config_path)
        return cls(load_config(config_path), GlobFileFinder(root), **kwargs)

    def _node_paths(self) -> List[str]:
        root = getattr(self.finder, "root", ".")
        paths = [os.path.join(root, p) for p in self.config.node_module_paths]
        return paths + self.extra_node_paths

    def strategies(self) -> List[ExportStrategy]:
        return default_strategies(
            node_paths=self._node_paths(),
            use_introspection=self.config.use_introspection,
            node_binary=self.config.node_binary,
            timeout=self.config.introspection_timeout,
        )

    def load_actions(self, on_warning: Optional[Notify] = None,
                     on_error: Optional[Notify] = None) -> List[ImportNameRecord]:
        kwargs = {}
        if on_warning is not None:
            kwargs["on_warning"] = on_warning
        if on_error is not None:
            kwargs["on_error"] = on_error

        self.records = get_actions(self.config, self.finder, self.strategies(), **kwargs)
        self.completer = ActionCompleter(self.records, self.parser, self.config.trigger)
        return self.records

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self.parser.dispose()
