"""
Rendering of import statements.

A fresh statement is synthesized from a module name; a merged statement is
the existing declaration with new named specifiers appended. Either way the
result is a single line. Specifier order is preserved and nothing is
deduplicated here: callers check `contains_specifier` first.
"""

import re
from typing import Iterable, List, Union

from .types import ImportDeclaration, ImportSpecifier

_NEWLINES = re.compile(r"\s*\r?\n\s*")


def create_import_specifiers(names: Iterable[str]) -> List[ImportSpecifier]:
    """Bare named specifiers; imported and local names are the same."""
    return [ImportSpecifier.named(name) for name in names]


def create_import_declaration(source: str, names: Iterable[str]) -> ImportDeclaration:
    """A synthesized declaration. It has no source range."""
    return ImportDeclaration(source=source, specifiers=tuple(create_import_specifiers(names)))


def add_specifiers_to_import(declaration: ImportDeclaration,
                             specifiers: List[ImportSpecifier]) -> ImportDeclaration:
    return declaration.with_specifiers(specifiers)


def _render_specifier(specifier: ImportSpecifier) -> str:
    if specifier.is_aliased:
        return f"{specifier.imported} as {specifier.local}"
    return specifier.local


def generate(declaration: ImportDeclaration) -> str:
    """Serialize a declaration, e.g. `import React, {a, b as c} from "m"`."""
    clause: List[str] = []
    named: List[str] = []
    for specifier in declaration.specifiers:
        if specifier.kind == "default":
            clause.append(specifier.local)
        elif specifier.kind == "namespace":
            clause.append(f"* as {specifier.local}")
        else:
            named.append(_render_specifier(specifier))

    if named:
        clause.append("{" + ", ".join(named) + "}")

    source = f"{declaration.quote}{declaration.source}{declaration.quote}"
    if clause:
        rendered = f"import {', '.join(clause)} from {source}"
    else:
        rendered = f"import {source}"

    if declaration.attributes:
        rendered += f" {declaration.attributes}"
    if declaration.terminated:
        rendered += ";"
    return rendered


def render_import(import_statement_or_source: Union[ImportDeclaration, str],
                  extra_specifiers: Iterable[str],
                  newline: bool = False) -> str:
    """Render a fresh or merged import statement on one line.

    Args:
        import_statement_or_source: A module name for a new statement, or an
            existing declaration to append to
        extra_specifiers: Names to import
        newline: Append a trailing newline
    """
    if isinstance(import_statement_or_source, str):
        declaration = create_import_declaration(import_statement_or_source, extra_specifiers)
    else:
        declaration = add_specifiers_to_import(
            import_statement_or_source, create_import_specifiers(extra_specifiers)
        )

    rendered = _NEWLINES.sub(" ", generate(declaration))
    return rendered + ("\n" if newline else "")
