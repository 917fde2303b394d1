"""
Queries over a parse outcome: which imports exist, which of them target a
given module, and whether a name is already imported.
"""

import posixpath
from typing import Iterable, List, Optional

from .javascript_adapter import JavaScriptAdapter, LineIndex
from .types import FailedParse, ImportDeclaration, ParseOutcome, SourceRange

_adapter = JavaScriptAdapter()


def _split_module(specifier: str):
    """(directory, base name without extension) of a module specifier."""
    directory, base = posixpath.split(specifier.rstrip("/") or specifier)
    name, _ext = posixpath.splitext(base)
    return directory, name


def module_specifiers_equal(first: str, second: str) -> bool:
    """Two specifiers name the same module when directory and base name match.

    The extension is ignored, so "pkg/foo.js" and "pkg/foo" are equal.
    """
    return _split_module(first) == _split_module(second)


def get_all_imports(outcome: ParseOutcome) -> List[ImportDeclaration]:
    """Top-level import declarations in document order."""
    if isinstance(outcome, FailedParse):
        return []

    lines = LineIndex(outcome.text)
    return [
        _adapter.declaration_from_node(node, lines)
        for node in _adapter.top_level(outcome.tree)
        if _adapter.is_import(node)
    ]


def get_imports_for_module(outcome: ParseOutcome, target_module: str) -> List[ImportDeclaration]:
    return [
        declaration for declaration in get_all_imports(outcome)
        if module_specifiers_equal(declaration.source, target_module)
    ]


def get_exported_names(outcome: ParseOutcome) -> List[str]:
    """Names declared by top-level named export statements."""
    if isinstance(outcome, FailedParse):
        return []

    names: List[str] = []
    for node in _adapter.top_level(outcome.tree):
        if _adapter.is_named_export(node):
            names.extend(_adapter.exported_names(node))
    return names


def contains_specifier(declarations: Iterable[ImportDeclaration], name: str) -> bool:
    """True if any named binding imports `name` (by its external name)."""
    return any(
        specifier.kind == "named" and specifier.imported == name
        for declaration in declarations
        for specifier in declaration.specifiers
    )


def get_location_data(declaration: ImportDeclaration) -> Optional[SourceRange]:
    return declaration.loc
