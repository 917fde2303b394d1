"""
Core types for the actionfinder import engine.

This module provides the value types shared across the parser, query,
renderer and planner: parse outcomes, import declarations, edits and
import-name records. All of them are immutable; merging a specifier into a
declaration always produces a new declaration.
"""

from dataclasses import dataclass, field, replace
from typing import Any, List, Literal, Optional, Tuple, Union


# Type aliases for clarity
SpecifierKind = Literal["named", "default", "namespace"]
DerivationMode = Literal["local", "dependency"]
Triple = Tuple[str, str, str]


class ActionFinderError(Exception):
    """Base class for errors raised by the actionfinder package."""


class IntrospectionError(ActionFinderError):
    """Loading a module to read its exported names failed."""


class ExportEnumerationError(ActionFinderError):
    """No strategy could enumerate the exported names of a file."""


class ConfigError(ActionFinderError):
    """Configuration could not be read or is invalid."""


@dataclass(frozen=True)
class Position:
    """A 0-based line and character column in a buffer."""
    line: int
    character: int


@dataclass(frozen=True)
class SourceRange:
    """Start/end positions of a node in the buffer it was parsed from."""
    start: Position
    end: Position


@dataclass(frozen=True)
class ImportSpecifier:
    """A single binding inside an import statement.

    Attributes:
        kind: "named" for `{a}` / `{a as b}`, "default" for `import a from`,
            "namespace" for `import * as a from`
        imported: External name (only meaningful for named bindings)
        local: Name bound in the importing module
    """
    kind: SpecifierKind
    imported: str
    local: str

    @classmethod
    def named(cls, name: str) -> "ImportSpecifier":
        return cls(kind="named", imported=name, local=name)

    @property
    def is_aliased(self) -> bool:
        return self.kind == "named" and self.imported != self.local


@dataclass(frozen=True)
class ImportDeclaration:
    """One `import ... from "source"` statement.

    `loc` is None for declarations that were synthesized instead of parsed.
    `quote`, `terminated` and `attributes` carry enough of the original
    source text to re-render the statement without changing its style.
    """
    source: str
    specifiers: Tuple[ImportSpecifier, ...] = ()
    loc: Optional[SourceRange] = None
    quote: str = '"'
    terminated: bool = False
    attributes: Optional[str] = None

    def with_specifiers(self, extra: List[ImportSpecifier]) -> "ImportDeclaration":
        """Return a copy with `extra` appended to the specifier list."""
        if not extra:
            return self
        return replace(self, specifiers=self.specifiers + tuple(extra))


@dataclass(frozen=True)
class SuccessfulParse:
    """A buffer that parsed cleanly."""
    tree: Any
    comments: Tuple[Any, ...] = ()
    tokens: Tuple[Any, ...] = ()
    text: str = ""


@dataclass(frozen=True)
class FailedParse:
    """A buffer that could not be parsed. Every query on it is empty."""
    reason: str = ""


ParseOutcome = Union[SuccessfulParse, FailedParse]

FAILED_PARSE = FailedParse()


@dataclass(frozen=True)
class InsertEdit:
    position: Position
    text: str


@dataclass(frozen=True)
class ReplaceEdit:
    range: SourceRange
    text: str


@dataclass(frozen=True)
class NoOpEdit:
    """Nothing to change: the requested specifier is already imported."""


Edit = Union[InsertEdit, ReplaceEdit, NoOpEdit]

NOOP_EDIT = NoOpEdit()

TOP_OF_BUFFER = Position(0, 0)


def edit_to_dict(edit: Edit) -> dict:
    """Serialize an edit for JSON output."""
    if isinstance(edit, InsertEdit):
        return {
            "type": "insert",
            "position": [edit.position.line, edit.position.character],
            "text": edit.text,
        }
    if isinstance(edit, ReplaceEdit):
        return {
            "type": "replace",
            "range": [
                [edit.range.start.line, edit.range.start.character],
                [edit.range.end.line, edit.range.end.character],
            ],
            "text": edit.text,
        }
    return {"type": "noop"}


@dataclass(frozen=True)
class FileListing:
    """Relates a module with the files we care about from it."""
    module_name: str
    files: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CrossProductSuccess:
    result: List[Triple] = field(default_factory=list)


@dataclass(frozen=True)
class CrossProductFailure:
    """At least one input set was empty."""


CrossProduct3 = Union[CrossProductSuccess, CrossProductFailure]
