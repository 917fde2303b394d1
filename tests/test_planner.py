# tests/test_planner.py
"""
Tests for import edit planning.

Covers the three outcomes (insert, replace, no-op), the fallbacks for
malformed source and missing locations, and applying the planned edits.
"""

from actionfinder.buffers import apply_edit
from actionfinder.parser import ParsedModule
from actionfinder.planner import plan_import_edit
from actionfinder.types import (
    ImportDeclaration, ImportSpecifier, InsertEdit, NoOpEdit, Position, ReplaceEdit, SourceRange,
)


def plan(parser, buffer, module_name, specifier):
    return plan_import_edit(buffer, module_name, specifier, parser)


def test_empty_buffer_gets_new_statement(parser, make_buffer):
    edit = plan(parser, make_buffer(""), "pkg/foo", "bar")

    assert edit == InsertEdit(Position(0, 0), 'import {bar} from "pkg/foo"\n')


def test_existing_import_is_extended_in_place(parser, make_buffer):
    edit = plan(parser, make_buffer('import {a} from "pkg/foo"'), "pkg/foo", "b")

    assert isinstance(edit, ReplaceEdit)
    assert edit.range == SourceRange(Position(0, 0), Position(0, 25))
    assert edit.text == 'import {a, b} from "pkg/foo"'


def test_present_specifier_is_noop(parser, make_buffer):
    edit = plan(parser, make_buffer('import {a} from "pkg/foo"'), "pkg/foo", "a")

    assert isinstance(edit, NoOpEdit)


def test_second_plan_after_applying_is_noop(parser, make_buffer):
    buffer = make_buffer('import {a} from "pkg/foo"\n\ndispatch(a());\n')

    first = plan(parser, buffer, "pkg/foo", "b")
    buffer.apply(first)
    second = plan(parser, buffer, "pkg/foo", "b")

    assert isinstance(first, ReplaceEdit)
    assert isinstance(second, NoOpEdit)
    assert buffer.get_text() == 'import {a, b} from "pkg/foo"\n\ndispatch(a());\n'


def test_inserted_statement_is_idempotent(parser, make_buffer):
    buffer = make_buffer("dispatch(x());\n")

    buffer.apply(plan(parser, buffer, "pkg/foo", "x"))

    assert buffer.get_text() == 'import {x} from "pkg/foo"\ndispatch(x());\n'
    assert isinstance(plan(parser, buffer, "pkg/foo", "x"), NoOpEdit)


def test_extension_insensitive_match(parser, make_buffer):
    edit = plan(parser, make_buffer('import {a} from "pkg/foo.js";'), "pkg/foo", "b")

    assert edit == ReplaceEdit(
        SourceRange(Position(0, 0), Position(0, 29)),
        'import {a, b} from "pkg/foo.js";',
    )


def test_trailing_slash_specifier_is_extended(parser, make_buffer):
    edit = plan(parser, make_buffer('import {a} from "pkg/foo/";'), "pkg/foo", "b")

    assert edit == ReplaceEdit(
        SourceRange(Position(0, 0), Position(0, 27)),
        'import {a, b} from "pkg/foo/";',
    )


def test_unencodable_buffer_falls_back_to_insert(parser, make_buffer):
    buffer = make_buffer('import {a} from "m";\nconst s = "\ud800";\n')

    edit = plan(parser, buffer, "m", "b")

    assert edit == InsertEdit(Position(0, 0), 'import {b} from "m"\n')


def test_malformed_buffer_falls_back_to_insert(parser, make_buffer):
    buffer = make_buffer('import {a, b from "pkg/foo"\nconst x = {\n')

    edit = plan(parser, buffer, "pkg/foo", "a")

    assert edit == InsertEdit(Position(0, 0), 'import {a} from "pkg/foo"\n')


def test_multiline_import_range_and_apply(parser, make_buffer):
    text = (
        "// header\n"
        'import React from "react";\n'
        "import {\n"
        "  a,\n"
        "  b as c\n"
        "} from './pkg/foo';\n"
        "\n"
        "dispatch(a());\n"
    )
    buffer = make_buffer(text)

    edit = plan(parser, buffer, "./pkg/foo", "d")

    assert edit == ReplaceEdit(
        SourceRange(Position(2, 0), Position(5, 19)),
        "import {a, b as c, d} from './pkg/foo';",
    )
    assert apply_edit(text, edit) == (
        "// header\n"
        'import React from "react";\n'
        "import {a, b as c, d} from './pkg/foo';\n"
        "\n"
        "dispatch(a());\n"
    )


def test_aliased_binding_matches_by_imported_name(parser, make_buffer):
    buffer = make_buffer('import {a as b} from "m";')

    assert isinstance(plan(parser, buffer, "m", "a"), NoOpEdit)
    assert plan(parser, buffer, "m", "b").text == 'import {a as b, b} from "m";'


def test_default_import_gains_named_group(parser, make_buffer):
    edit = plan(parser, make_buffer('import React from "react"'), "react", "useState")

    assert edit.text == 'import React, {useState} from "react"'


def test_first_of_several_matches_is_extended(parser, make_buffer):
    buffer = make_buffer('import {a} from "m";\nimport {b} from "m";\n')

    edit = plan(parser, buffer, "m", "c")

    assert edit.range == SourceRange(Position(0, 0), Position(0, 20))
    assert edit.text == 'import {a, c} from "m";'


def test_specifier_in_later_match_is_noop(parser, make_buffer):
    buffer = make_buffer('import {a} from "m";\nimport {b} from "m";\n')

    assert isinstance(plan(parser, buffer, "m", "b"), NoOpEdit)


def test_namespace_import_gets_separate_statement(parser, make_buffer):
    edit = plan(parser, make_buffer('import * as foo from "pkg/foo";'), "pkg/foo", "b")

    assert edit == InsertEdit(Position(0, 0), 'import {b} from "pkg/foo"\n')


def test_side_effect_import_gains_bindings(parser, make_buffer):
    edit = plan(parser, make_buffer('import "pkg/foo";'), "pkg/foo", "b")

    assert edit.text == 'import {b} from "pkg/foo";'


def test_columns_are_characters_not_bytes(parser, make_buffer):
    edit = plan(parser, make_buffer('/* é */ import {a} from "m";'), "m", "b")

    assert edit.range == SourceRange(Position(0, 8), Position(0, 28))


class _SynthesizedParser:
    """Returns declarations that were never parsed, so they have no range."""

    def __init__(self, declarations):
        self.declarations = declarations

    def parse(self, buffer):
        declarations = self.declarations

        class _Module(ParsedModule):
            def get_imports_for_module(self, target_module):
                return declarations

        return _Module(buffer, None)


def test_missing_location_falls_back_to_insert(make_buffer):
    declaration = ImportDeclaration(source="pkg/foo", specifiers=(ImportSpecifier.named("a"),))

    edit = plan_import_edit(make_buffer(""), "pkg/foo", "b", _SynthesizedParser([declaration]))

    assert edit == InsertEdit(Position(0, 0), 'import {a, b} from "pkg/foo"\n')


def test_planning_never_mutates_buffer(parser, make_buffer):
    buffer = make_buffer('import {a} from "pkg/foo"')

    plan(parser, buffer, "pkg/foo", "b")

    assert buffer.get_text() == 'import {a} from "pkg/foo"'
