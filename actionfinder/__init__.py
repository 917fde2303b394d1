"""
actionfinder import engine package.

Finds exported action creators in a JavaScript workspace and plans the
minimal edit that imports one of them into a document.
"""

from .types import (
    Position, SourceRange, ImportSpecifier, ImportDeclaration,
    SuccessfulParse, FailedParse, ParseOutcome,
    InsertEdit, ReplaceEdit, NoOpEdit, Edit, FileListing,
    ActionFinderError, IntrospectionError, ExportEnumerationError, ConfigError
)

from .buffers import Buffer, BufferEvents, TextBuffer, apply_edit, buffer_events

from .parser import Parser, ParsedModule, default_parser

from .query import (
    get_all_imports, get_imports_for_module, get_exported_names,
    contains_specifier, module_specifiers_equal
)

from .renderer import render_import

from .planner import plan_import_edit

from .import_name import ImportNameRecord, derive_import_name, create_import_name_record

from .config import ActionFinderConfig, load_config, get_default_config, save_config, find_config_file

__all__ = [
    # Types
    "Position", "SourceRange", "ImportSpecifier", "ImportDeclaration",
    "SuccessfulParse", "FailedParse", "ParseOutcome",
    "InsertEdit", "ReplaceEdit", "NoOpEdit", "Edit", "FileListing",
    "ActionFinderError", "IntrospectionError", "ExportEnumerationError", "ConfigError",

    # Buffers
    "Buffer", "BufferEvents", "TextBuffer", "apply_edit", "buffer_events",

    # Engine
    "Parser", "ParsedModule", "default_parser",
    "get_all_imports", "get_imports_for_module", "get_exported_names",
    "contains_specifier", "module_specifiers_equal",
    "render_import", "plan_import_edit",
    "ImportNameRecord", "derive_import_name", "create_import_name_record",

    # Config
    "ActionFinderConfig", "load_config", "get_default_config", "save_config", "find_config_file"
]
