"""
Enumeration of the names a JavaScript file exports.

Two strategies are tried in order, first success wins:
- `NodeIntrospectionStrategy` loads the file with Node.js and lists the own
  keys of the module object. Fast and exact for CommonJS, but fails on
  syntax Node cannot load (e.g. ES modules under `require`).
- `SyntaxExportStrategy` parses the file and collects the names declared by
  named export statements.
"""

import json
import logging
import os
import subprocess
from typing import List, Optional, Protocol, Sequence

from .buffers import TextBuffer
from .parser import Parser
from .types import ExportEnumerationError, IntrospectionError

logger = logging.getLogger(__name__)

_KEYS_SCRIPT = "process.stdout.write(JSON.stringify(Object.keys(require(process.argv[1]))))"


class ExportStrategy(Protocol):
    name: str

    def exported_names(self, file_path: str) -> List[str]: ...


class NodeIntrospectionStrategy:
    """Runs `require()` in a Node.js subprocess with NODE_PATH set."""

    name = "introspection"

    def __init__(self, node_paths: Sequence[str] = (), node_binary: str = "node",
                 timeout: float = 10.0):
        self.node_paths = list(node_paths)
        self.node_binary = node_binary
        self.timeout = timeout

    def _env(self) -> dict:
        env = dict(os.environ)
        if self.node_paths:
            env["NODE_PATH"] = os.pathsep.join(os.path.abspath(p) for p in self.node_paths)
        return env

    def exported_names(self, file_path: str) -> List[str]:
        try:
            completed = subprocess.run(
                [self.node_binary, "-e", _KEYS_SCRIPT, os.path.abspath(file_path)],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=self._env(),
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise IntrospectionError(f"could not run {self.node_binary}: {e}") from e

        if completed.returncode != 0:
            raise IntrospectionError(
                f"require({file_path}) failed: {completed.stderr.strip()}"
            )

        try:
            names = json.loads(completed.stdout)
        except json.JSONDecodeError as e:
            raise IntrospectionError(f"unexpected output for {file_path}: {e}") from e

        if not isinstance(names, list):
            raise IntrospectionError(f"unexpected output for {file_path}: {names!r}")
        return [str(name) for name in names]


class SyntaxExportStrategy:
    """Reads named export declarations from the file's syntax tree."""

    name = "syntax"

    def __init__(self, parser: Optional[Parser] = None):
        self.parser = parser or Parser()

    def exported_names(self, file_path: str) -> List[str]:
        try:
            buffer = TextBuffer.from_file(file_path)
        except (OSError, UnicodeDecodeError) as e:
            raise ExportEnumerationError(f"could not read {file_path}: {e}") from e

        module = self.parser.parse(buffer)
        if module.failed:
            logger.debug("Could not parse %s; no exports found", file_path)
        names = module.get_exported_names()
        self.parser.invalidate(buffer.buffer_id)
        return names


def enumerate_exported_names(file_path: str, strategies: Sequence[ExportStrategy]) -> List[str]:
    """Exported names of one file from the first strategy that succeeds."""
    errors = []
    for strategy in strategies:
        try:
            return strategy.exported_names(file_path)
        except (IntrospectionError, ExportEnumerationError) as e:
            logger.debug("%s strategy failed for %s: %s", strategy.name, file_path, e)
            errors.append(f"{strategy.name}: {e}")

    raise ExportEnumerationError(
        f"no strategy could list exports of {file_path} ({'; '.join(errors) or 'no strategies'})"
    )


def default_strategies(node_paths: Sequence[str] = (), use_introspection: bool = True,
                       node_binary: str = "node", timeout: float = 10.0,
                       parser: Optional[Parser] = None) -> List[ExportStrategy]:
    strategies: List[ExportStrategy] = []
    if use_introspection:
        strategies.append(NodeIntrospectionStrategy(node_paths, node_binary, timeout))
    strategies.append(SyntaxExportStrategy(parser))
    return strategies
