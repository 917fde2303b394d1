"""
JavaScript language adapter for tree-sitter.

Turns tree-sitter nodes for ES module syntax into the engine's value types:
import statements become `ImportDeclaration`s, named export statements
become lists of exported names.
"""
import logging
from typing import Any, Iterator, List, Optional, Tuple

from .types import ImportDeclaration, ImportSpecifier, Position, SourceRange

logger = logging.getLogger(__name__)

# Declarations under `export` that bind a simple name
_VARIABLE_DECLARATIONS = ("lexical_declaration", "variable_declaration")
_FUNCTION_DECLARATIONS = ("function_declaration", "generator_function_declaration")
_ATTRIBUTE_CLAUSES = ("import_attribute", "import_assertion")


def _node_text_to_str(node_text: Any) -> str:
    """Helper to convert tree-sitter node.text to string, handling bytes/str."""
    if node_text is None:
        return ""
    if isinstance(node_text, bytes):
        return node_text.decode("utf-8", errors="ignore")
    return str(node_text)


class LineIndex:
    """Maps tree-sitter points (row, byte column) to character positions."""

    def __init__(self, text: str):
        self._lines = [line.encode("utf-8") for line in text.split("\n")]

    def position(self, point: Tuple[int, int]) -> Position:
        row, byte_col = point[0], point[1]
        if row >= len(self._lines):
            return Position(row, byte_col)
        prefix = self._lines[row][:byte_col]
        return Position(row, len(prefix.decode("utf-8", errors="ignore")))

    def range_of(self, node: Any) -> SourceRange:
        return SourceRange(self.position(node.start_point), self.position(node.end_point))


class JavaScriptAdapter:
    """Tree-sitter adapter for JavaScript modules."""

    def __init__(self):
        self._parser = None

    @property
    def language_id(self) -> str:
        return "javascript"

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        return (".js", ".jsx", ".mjs")

    def _get_parser(self):
        """Get or create the tree-sitter parser."""
        if self._parser is None:
            try:
                import tree_sitter
                from tree_sitter_javascript import language

                self._parser = tree_sitter.Parser()
                self._parser.language = tree_sitter.Language(language())
                logger.debug("JavaScript parser initialized")
            except ImportError as e:
                logger.warning("tree-sitter-javascript not available: %s", e)
                self._parser = None

        return self._parser

    def parse(self, text: str) -> Any:
        """Parse text and return a tree-sitter tree, or None without a parser."""
        parser = self._get_parser()
        if parser is None:
            return None
        return parser.parse(text.encode("utf-8"))

    # -- traversal -----------------------------------------------------------

    def walk(self, tree: Any) -> Iterator[Any]:
        """Yield every node in document order."""
        root = tree.root_node if hasattr(tree, "root_node") else tree
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def comments(self, tree: Any) -> List[Any]:
        return [node for node in self.walk(tree) if node.type == "comment"]

    def tokens(self, tree: Any) -> List[Any]:
        return [node for node in self.walk(tree)
                if node.child_count == 0 and node.type != "program"]

    def top_level(self, tree: Any) -> List[Any]:
        return list(tree.root_node.children)

    # -- imports ---------------------------------------------------------------

    def is_import(self, node: Any) -> bool:
        return node.type == "import_statement"

    def declaration_from_node(self, node: Any, lines: Optional[LineIndex] = None) -> ImportDeclaration:
        """Build an `ImportDeclaration` from an `import_statement` node."""
        source_node = node.child_by_field_name("source")
        if source_node is None:
            source_node = next((c for c in node.children if c.type == "string"), None)

        source, quote = self._extract_string_value(source_node)
        specifiers: List[ImportSpecifier] = []
        attributes = None
        terminated = False

        for child in node.children:
            if child.type == "import_clause":
                specifiers.extend(self._clause_specifiers(child))
            elif child.type in _ATTRIBUTE_CLAUSES:
                attributes = _node_text_to_str(child.text)
            elif child.type == ";":
                terminated = True

        return ImportDeclaration(
            source=source,
            specifiers=tuple(specifiers),
            loc=lines.range_of(node) if lines is not None else None,
            quote=quote,
            terminated=terminated,
            attributes=attributes,
        )

    def _clause_specifiers(self, clause: Any) -> Iterator[ImportSpecifier]:
        for child in clause.children:
            # Default import: import X from 'module'
            if child.type == "identifier":
                name = _node_text_to_str(child.text)
                yield ImportSpecifier(kind="default", imported="default", local=name)

            # Namespace import: import * as X from 'module'
            elif child.type == "namespace_import":
                ident = next((c for c in child.children if c.type == "identifier"), None)
                name = _node_text_to_str(ident.text) if ident is not None else ""
                yield ImportSpecifier(kind="namespace", imported="*", local=name)

            # Named imports: import { a, b as c } from 'module'
            elif child.type == "named_imports":
                for spec in child.children:
                    if spec.type == "import_specifier":
                        yield self._named_specifier(spec)

    def _named_specifier(self, spec: Any) -> ImportSpecifier:
        name_node = spec.child_by_field_name("name")
        alias_node = spec.child_by_field_name("alias")
        if name_node is None:
            name_node = spec.named_children[0]

        imported = _node_text_to_str(name_node.text)
        local = _node_text_to_str(alias_node.text) if alias_node is not None else imported
        return ImportSpecifier(kind="named", imported=imported, local=local)

    def _extract_string_value(self, string_node: Any) -> Tuple[str, str]:
        """Return the unquoted value and the quote character of a string node."""
        if string_node is None:
            return "", '"'
        text = _node_text_to_str(string_node.text)
        if len(text) >= 2 and text[0] in ('"', "'") and text[-1] == text[0]:
            return text[1:-1], text[0]
        return text, '"'

    # -- exports ---------------------------------------------------------------

    def is_named_export(self, node: Any) -> bool:
        """True for `export <declaration>` and `export {...}`, not `export default`."""
        if node.type != "export_statement":
            return False
        return not any(child.type == "default" for child in node.children)

    def exported_names(self, node: Any) -> List[str]:
        """Names bound by a named export's declaration.

        Only variable and function declarations with a plain identifier
        contribute; destructuring patterns and export lists give nothing.
        """
        declaration = node.child_by_field_name("declaration")
        if declaration is None:
            return []

        if declaration.type in _VARIABLE_DECLARATIONS:
            names = []
            for declarator in declaration.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                if name_node is not None and name_node.type == "identifier":
                    names.append(_node_text_to_str(name_node.text))
            return names

        if declaration.type in _FUNCTION_DECLARATIONS:
            name_node = declaration.child_by_field_name("name")
            if name_node is not None and name_node.type == "identifier":
                return [_node_text_to_str(name_node.text)]

        return []
