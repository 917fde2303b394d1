"""
Import edit planning.

`plan_import_edit` decides how to make `specifier` available from
`module_name` in a buffer and describes the change as an `Edit`; it never
touches the buffer itself.
"""

import logging
from typing import List, Optional

from .buffers import Buffer
from .parser import Parser, default_parser
from .query import contains_specifier, get_location_data
from .renderer import render_import
from .types import (
    NOOP_EDIT, TOP_OF_BUFFER, Edit, ImportDeclaration, InsertEdit, ReplaceEdit,
)

logger = logging.getLogger(__name__)


def _merge_target(existing: List[ImportDeclaration]) -> Optional[ImportDeclaration]:
    """First matching declaration that can take a named specifier.

    A namespace import (`import * as x`) cannot be combined with named
    bindings, so those are passed over.
    """
    for declaration in existing:
        if not any(s.kind == "namespace" for s in declaration.specifiers):
            return declaration
    return None


def plan_import_edit(buffer: Buffer, module_name: str, specifier: str,
                     parser: Optional[Parser] = None) -> Edit:
    module = (parser or default_parser).parse(buffer)
    existing = module.get_imports_for_module(module_name)

    if not existing:
        # No existing imports for this module
        return InsertEdit(TOP_OF_BUFFER, render_import(module_name, [specifier], newline=True))

    if contains_specifier(existing, specifier):
        return NOOP_EDIT

    # Only the first match is merged into; several matches means the user
    # imported the same module more than once.
    target = _merge_target(existing)
    if target is None:
        logger.debug("Only namespace imports of %s; adding a new statement", module_name)
        return InsertEdit(TOP_OF_BUFFER, render_import(module_name, [specifier], newline=True))

    location = get_location_data(target)
    if location is not None:
        return ReplaceEdit(location, render_import(target, [specifier]))

    return InsertEdit(TOP_OF_BUFFER, render_import(target, [specifier], newline=True))
