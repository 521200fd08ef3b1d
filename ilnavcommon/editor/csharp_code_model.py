"""Code model for C# documents based on tree-sitter."""

from __future__ import annotations

from pathlib import Path

import tree_sitter_c_sharp
from tree_sitter import Language
from tree_sitter import Node
from tree_sitter import Parser
from tree_sitter import Tree

from ilnav.logger import ILNAV_LOGGER

from .code_element import CodeElement
from .code_element import CodeElementKind
from .code_model import CodeModel

log = ILNAV_LOGGER.getChild(__name__)

NODE_KINDS: dict[str, CodeElementKind] = {
    "method_declaration": CodeElementKind.METHOD,
    "constructor_declaration": CodeElementKind.METHOD,
    "destructor_declaration": CodeElementKind.METHOD,
    "operator_declaration": CodeElementKind.METHOD,
    "conversion_operator_declaration": CodeElementKind.METHOD,
    "event_declaration": CodeElementKind.EVENT,
    "event_field_declaration": CodeElementKind.EVENT,
    "property_declaration": CodeElementKind.PROPERTY,
    "indexer_declaration": CodeElementKind.PROPERTY,
    "delegate_declaration": CodeElementKind.DELEGATE,
    "enum_declaration": CodeElementKind.ENUM,
    "interface_declaration": CodeElementKind.INTERFACE,
    "struct_declaration": CodeElementKind.STRUCT,
    "record_struct_declaration": CodeElementKind.STRUCT,
    "class_declaration": CodeElementKind.CLASS,
    "record_declaration": CodeElementKind.CLASS,
}

TYPE_KINDS = {
    CodeElementKind.DELEGATE,
    CodeElementKind.ENUM,
    CodeElementKind.INTERFACE,
    CodeElementKind.STRUCT,
    CodeElementKind.CLASS,
}

NAMESPACE_NODE_TYPES = {"namespace_declaration", "file_scoped_namespace_declaration"}

# metadata names of user-defined operators
BINARY_OPERATORS = {
    "+": "op_Addition",
    "-": "op_Subtraction",
    "*": "op_Multiply",
    "/": "op_Division",
    "%": "op_Modulus",
    "&": "op_BitwiseAnd",
    "|": "op_BitwiseOr",
    "^": "op_ExclusiveOr",
    "<<": "op_LeftShift",
    ">>": "op_RightShift",
    ">>>": "op_UnsignedRightShift",
    "==": "op_Equality",
    "!=": "op_Inequality",
    "<": "op_LessThan",
    ">": "op_GreaterThan",
    "<=": "op_LessThanOrEqual",
    ">=": "op_GreaterThanOrEqual",
}
UNARY_OPERATORS = {
    "+": "op_UnaryPlus",
    "-": "op_UnaryNegation",
    "!": "op_LogicalNot",
    "~": "op_OnesComplement",
    "++": "op_Increment",
    "--": "op_Decrement",
    "true": "op_True",
    "false": "op_False",
}

# operators with a checked variant, e.g. "operator checked +" is op_CheckedAddition
CHECKED_OPERATORS = {
    "op_Addition",
    "op_Subtraction",
    "op_Multiply",
    "op_Division",
    "op_UnaryNegation",
    "op_Increment",
    "op_Decrement",
    "op_Explicit",
}

_PARSER: Parser | None = None


def _get_parser() -> Parser:
    """Initialize and return the tree-sitter parser for C#."""
    global _PARSER  # pylint: disable=global-statement
    if _PARSER is None:
        _PARSER = Parser(Language(tree_sitter_c_sharp.language()))
    return _PARSER


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def _node_kind(node: Node) -> CodeElementKind | None:
    kind = NODE_KINDS.get(node.type)
    if node.type == "record_declaration" and any(c.type == "struct" for c in node.children):
        return CodeElementKind.STRUCT
    return kind


def _identifier(node: Node) -> str:
    name = node.child_by_field_name("name")
    if name is None:
        name = next((c for c in node.children if c.type == "identifier"), None)
    return _text(name)


def _type_parameter_count(node: Node) -> int:
    for child in node.children:
        if child.type == "type_parameter_list":
            return sum(1 for c in child.named_children if c.type == "type_parameter")
    return 0


def _parameter_count(node: Node) -> int:
    params = node.child_by_field_name("parameters")
    if params is None:
        params = next((c for c in node.children if c.type == "parameter_list"), None)
    if params is None:
        return 0
    return sum(1 for c in params.named_children if c.type == "parameter")


def _has_modifier(node: Node, modifier: str) -> bool:
    return any(c.type == "modifier" and _text(c) == modifier for c in node.children)


def _operator_token(node: Node) -> str:
    op = node.child_by_field_name("operator")
    if op is not None:
        return _text(op)
    tokens = [c for c in node.children if c.type != "checked"]
    for i, child in enumerate(tokens[:-1]):
        if child.type == "operator":
            return _text(tokens[i + 1])
    return ""


def _checked(node: Node, name: str) -> str:
    if name in CHECKED_OPERATORS and any(c.type == "checked" for c in node.children):
        return "op_Checked" + name.removeprefix("op_")
    return name


def _operator_name(node: Node) -> str:
    token = _operator_token(node)
    table = UNARY_OPERATORS if _parameter_count(node) == 1 else BINARY_OPERATORS
    return _checked(node, table.get(token, f"op_{token}"))


def _event_field_name(node: Node) -> str:
    stack = list(node.named_children)
    while stack:
        child = stack.pop(0)
        if child.type == "variable_declarator":
            return _identifier(child)
        stack.extend(child.named_children)
    return ""


def _element_name(node: Node) -> str:
    """
    Name of the element as used in documentation IDs.

    Constructors are #ctor/#cctor, finalizers Finalize, indexers Item and operators op_*; generic types get a
    `N and generic methods a ``N arity suffix.
    """
    match node.type:
        case "constructor_declaration":
            return "#cctor" if _has_modifier(node, "static") else "#ctor"
        case "destructor_declaration":
            return "Finalize"
        case "operator_declaration":
            return _operator_name(node)
        case "conversion_operator_declaration":
            if any(c.type == "implicit" for c in node.children):
                return "op_Implicit"
            return _checked(node, "op_Explicit")
        case "indexer_declaration":
            return "Item"
        case "event_field_declaration":
            return _event_field_name(node)
        case "method_declaration":
            arity = _type_parameter_count(node)
            return _identifier(node) + (f"``{arity}" if arity else "")

    name = _identifier(node)
    if _node_kind(node) in TYPE_KINDS:
        arity = _type_parameter_count(node)
        if arity:
            name += f"`{arity}"
    return name


def _namespace_name(node: Node) -> str:
    return "".join(_text(node.child_by_field_name("name")).split())


def _file_scoped_namespace(root: Node, node: Node) -> str | None:
    """Name of a file-scoped namespace declared before node, if any."""
    for child in root.children:
        if child.type == "file_scoped_namespace_declaration" and child.start_byte <= node.start_byte:
            return _namespace_name(child)
    return None


def _full_name(node: Node, root: Node) -> str:
    parts = [_element_name(node)]
    in_file_scoped_namespace = False

    ancestor = node.parent
    while ancestor is not None:
        if ancestor.type in NAMESPACE_NODE_TYPES:
            parts.append(_namespace_name(ancestor))
            in_file_scoped_namespace |= ancestor.type == "file_scoped_namespace_declaration"
        elif _node_kind(ancestor) in TYPE_KINDS:
            parts.append(_element_name(ancestor))
        ancestor = ancestor.parent

    # depending on the grammar version, members of a file-scoped namespace are its children or its siblings
    if not in_file_scoped_namespace:
        namespace = _file_scoped_namespace(root, node)
        if namespace:
            parts.append(namespace)

    return ".".join(reversed([p for p in parts if p]))


class CSharpCodeModel(CodeModel):
    """Code model for C# source files, parsed on demand."""

    def __init__(self) -> None:
        # unsaved editor content by absolute document path
        self.buffers: dict[Path, str] = {}
        self._trees: dict[Path, tuple[str, Tree]] = {}

    def file_changed(self, document: Path, content: str) -> None:
        self.buffers[document.absolute()] = content

    def _read(self, document: Path) -> str:
        document = document.absolute()
        if document in self.buffers:
            return self.buffers[document]
        return document.read_text(encoding="utf-8-sig")

    def _parse(self, document: Path, text: str) -> Tree:
        document = document.absolute()
        cached = self._trees.get(document)
        if cached is not None and cached[0] == text:
            return cached[1]
        tree = _get_parser().parse(text.encode("utf-8"))
        self._trees[document] = (text, tree)
        return tree

    def element_at(self, document: Path, offset: int, kind: CodeElementKind) -> CodeElement | None:
        try:
            text = self._read(document)
        except OSError as exc:
            log.warning(f"Cannot read {document}: {exc}")
            return None

        tree = self._parse(document, text)
        source = text.encode("utf-8")
        offset = max(0, min(offset, len(text)))
        byte_offset = len(text[:offset].encode("utf-8"))

        node: Node | None = tree.root_node.descendant_for_byte_range(byte_offset, byte_offset)
        while node is not None:
            if _node_kind(node) is kind:
                return CodeElement(
                    kind=kind,
                    name=_element_name(node),
                    full_name=_full_name(node, tree.root_node),
                    document=document,
                    start=len(source[: node.start_byte].decode("utf-8")),
                    end=len(source[: node.end_byte].decode("utf-8")),
                )
            node = node.parent

        return None
