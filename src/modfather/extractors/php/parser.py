"""Parse PHP source with tree-sitter and lower it into :mod:`syntax` nodes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from modfather.extractors.php.names import NAMESPACE_SEPARATOR
from modfather.extractors.php.syntax import (
    ClassDecl,
    EnumDecl,
    Hint,
    InterfaceDecl,
    IntersectionHint,
    Member,
    Method,
    NamedHint,
    Namespace,
    NullableHint,
    Parameter,
    ParenthesizedHint,
    Program,
    Property,
    Statement,
    TraitDecl,
    TraitUse,
    UnionHint,
    UnsupportedHint,
    UnsupportedMember,
    UnsupportedStatement,
    Use,
    UseItem,
)

try:
    import tree_sitter_php as tsphp
    from tree_sitter import Language, Parser
except ImportError as _err:
    raise ImportError(
        "tree-sitter and tree-sitter-php are required. Install with: "
        "pip install php-modfather"
    ) from _err

logger = logging.getLogger(__name__)

# Node types that spell a class name in extends/implements/trait-use lists.
_NAME_TYPES = {"name", "qualified_name", "namespace_name", "relative_name"}

_PARAMETER_TYPES = {
    "simple_parameter",
    "variadic_parameter",
    "property_promotion_parameter",
}

_MEMBER_LIST_TYPES = {"declaration_list", "enum_declaration_list"}


@dataclass
class ParseResult:
    program: Program
    has_error: bool


@lru_cache(maxsize=1)
def _get_parser() -> Parser:
    return Parser(Language(tsphp.language_php()))


def parse_source(content: str | bytes) -> ParseResult:
    """Parse one PHP file.  Never raises on malformed input."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    tree = _get_parser().parse(content)
    root = tree.root_node
    program = Program(statements=tuple(_lower_statements(root.children)))
    return ParseResult(program=program, has_error=root.has_error)


def _text(node) -> str:
    # Drop whitespace tree-sitter keeps inside qualified names.
    return "".join(node.text.decode("utf-8", errors="replace").split())


def _type_name(node) -> str:
    # `namespace\Foo` is relative to the current namespace.
    text = _text(node)
    prefix = "namespace" + NAMESPACE_SEPARATOR
    if text[: len(prefix)].lower() == prefix:
        return text[len(prefix) :]
    return text


def _line(node) -> int:
    return node.start_point[0] + 1


# -- Statements ---------------------------------------------------------------


def _lower_statements(nodes) -> list[Statement]:
    """Lower a statement sequence, folding ``namespace X;`` over what follows."""
    statements: list[Statement] = []
    open_ns: tuple[str, list[Statement]] | None = None

    for node in nodes:
        if not node.is_named or node.type == "comment":
            continue
        if (
            node.type == "namespace_definition"
            and node.child_by_field_name("body") is None
        ):
            if open_ns is not None:
                statements.append(Namespace(open_ns[0], tuple(open_ns[1])))
            name_node = node.child_by_field_name("name")
            open_ns = (_text(name_node) if name_node is not None else "", [])
            continue

        target = open_ns[1] if open_ns is not None else statements
        target.extend(_lower_statement(node))

    if open_ns is not None:
        statements.append(Namespace(open_ns[0], tuple(open_ns[1])))
    return statements


def _lower_statement(node) -> list[Statement]:
    kind = node.type
    if kind == "namespace_definition":
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        return [
            Namespace(
                _text(name_node) if name_node is not None else None,
                tuple(_lower_statements(body.children)),
            )
        ]
    if kind == "namespace_use_declaration":
        return [_lower_use(node)]
    if kind == "class_declaration":
        return [_lower_class(node)]
    if kind == "interface_declaration":
        return [_lower_interface(node)]
    if kind == "trait_declaration":
        return [_lower_trait(node)]
    if kind == "enum_declaration":
        return [_lower_enum(node)]
    if kind == "ERROR":
        # Recover whatever declarations survived inside the error region.
        logger.debug("Recovering declarations from error at line %d", _line(node))
        return _lower_statements(node.children)
    return [UnsupportedStatement(kind)]


def _is_function_or_const(node) -> bool:
    return any(child.type in ("function", "const") for child in node.children)


def _lower_use(node) -> Statement:
    if _is_function_or_const(node):
        return UnsupportedStatement("use_function_or_const")

    items: list[UseItem] = []
    prefix: str | None = None
    for child in node.children:
        if child.type == "namespace_use_clause":
            if _is_function_or_const(child):
                continue
            item = _lower_use_clause(child)
            if item is not None:
                items.append(item)
        elif child.type in ("namespace_name", "name", "qualified_name"):
            prefix = _text(child)
        elif child.type == "namespace_use_group":
            for clause in child.named_children:
                if _is_function_or_const(clause):
                    continue
                item = _lower_use_clause(clause)
                if item is not None and prefix:
                    item = UseItem(
                        prefix.rstrip(NAMESPACE_SEPARATOR)
                        + NAMESPACE_SEPARATOR
                        + item.name.lstrip(NAMESPACE_SEPARATOR),
                        item.alias,
                    )
                if item is not None:
                    items.append(item)
    return Use(tuple(items))


def _lower_use_clause(node) -> UseItem | None:
    name: str | None = None
    alias: str | None = None
    alias_node = node.child_by_field_name("alias")
    after_as = False
    for child in node.children:
        if child.type == "as":
            after_as = True
        elif child.type == "namespace_aliasing_clause":
            for sub in child.named_children:
                if sub.type == "name":
                    alias = _text(sub)
        elif child.type in _NAME_TYPES:
            if alias_node is not None and child.id == alias_node.id:
                alias = _text(child)
            elif after_as:
                alias = _text(child)
            elif name is None:
                name = _text(child)
    if not name:
        return None
    return UseItem(name, alias)


def _names_in(clause) -> tuple[str, ...]:
    if clause is None:
        return ()
    return tuple(_type_name(c) for c in clause.named_children if c.type in _NAME_TYPES)


def _child_of_type(node, kind: str):
    for child in node.children:
        if child.type == kind:
            return child
    return None


def _name_of(node) -> str:
    name_node = node.child_by_field_name("name")
    return _text(name_node) if name_node is not None else ""


def _members_of(node) -> tuple[Member, ...]:
    body = node.child_by_field_name("body")
    if body is None:
        for child in node.children:
            if child.type in _MEMBER_LIST_TYPES:
                body = child
                break
    if body is None:
        return ()
    return tuple(
        _lower_member(child)
        for child in body.named_children
        if child.type != "comment"
    )


def _lower_class(node) -> ClassDecl:
    return ClassDecl(
        name=_name_of(node),
        extends=_names_in(_child_of_type(node, "base_clause")),
        implements=_names_in(_child_of_type(node, "class_interface_clause")),
        members=_members_of(node),
        line=_line(node),
    )


def _lower_interface(node) -> InterfaceDecl:
    return InterfaceDecl(
        name=_name_of(node),
        extends=_names_in(_child_of_type(node, "base_clause")),
        members=_members_of(node),
        line=_line(node),
    )


def _lower_trait(node) -> TraitDecl:
    return TraitDecl(name=_name_of(node), members=_members_of(node), line=_line(node))


def _lower_enum(node) -> EnumDecl:
    backing: Hint | None = None
    after_colon = False
    for child in node.children:
        if child.type == ":":
            after_colon = True
        elif after_colon and child.is_named:
            backing = _lower_hint(child)
            break
    return EnumDecl(
        name=_name_of(node),
        backing_hint=backing,
        implements=_names_in(_child_of_type(node, "class_interface_clause")),
        members=_members_of(node),
        line=_line(node),
    )


# -- Members ------------------------------------------------------------------


def _lower_member(node) -> Member:
    kind = node.type
    if kind == "property_declaration":
        type_node = node.child_by_field_name("type")
        names = tuple(
            _text(elem.named_children[0])
            for elem in node.named_children
            if elem.type == "property_element" and elem.named_children
        )
        return Property(
            hint=_lower_hint(type_node) if type_node is not None else None,
            names=names,
        )
    if kind == "method_declaration":
        return _lower_method(node)
    if kind == "use_declaration":
        return TraitUse(
            tuple(_type_name(c) for c in node.named_children if c.type in _NAME_TYPES)
        )
    return UnsupportedMember(kind)


def _lower_method(node) -> Method:
    params: list[Parameter] = []
    params_node = node.child_by_field_name("parameters")
    if params_node is not None:
        for child in params_node.named_children:
            if child.type not in _PARAMETER_TYPES:
                continue
            type_node = child.child_by_field_name("type")
            name_node = child.child_by_field_name("name")
            params.append(
                Parameter(
                    name=_text(name_node) if name_node is not None else "",
                    hint=_lower_hint(type_node) if type_node is not None else None,
                )
            )
    return_node = node.child_by_field_name("return_type")
    return Method(
        name=_name_of(node),
        parameters=tuple(params),
        return_hint=_lower_hint(return_node) if return_node is not None else None,
    )


# -- Type hints ---------------------------------------------------------------


def _lower_hint(node) -> Hint:
    kind = node.type
    if kind in ("named_type", "primitive_type", "bottom_type"):
        return NamedHint(_type_name(node))
    if kind in _NAME_TYPES:
        return NamedHint(_type_name(node))
    if kind == "optional_type":
        inner = [c for c in node.named_children if c.type != "comment"]
        if not inner:
            return UnsupportedHint(kind)
        return NullableHint(_lower_hint(inner[0]))
    if kind in ("union_type", "intersection_type", "disjunctive_normal_form_type"):
        members = _lower_hint_members(node)
        if len(members) == 1:
            return members[0]
        if kind == "intersection_type":
            return IntersectionHint(members)
        return UnionHint(members)
    return UnsupportedHint(kind)


def _lower_hint_members(node) -> tuple[Hint, ...]:
    members: list[Hint] = []
    in_parens = False
    for child in node.children:
        if child.type == "(":
            in_parens = True
        elif child.type == ")":
            in_parens = False
        elif child.is_named and child.type != "comment":
            hint = _lower_hint(child)
            members.append(ParenthesizedHint(hint) if in_parens else hint)
    return tuple(members)
