"""Closed syntax tree for the PHP declarations the dependency visitors understand.

The parser adapter lowers tree-sitter's concrete tree into these variants.
Every category (statement, member, hint) has an explicit ``Unsupported*``
variant so that visitors can match exhaustively instead of relying on a
catch-all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# -- Type hints ---------------------------------------------------------------


@dataclass(frozen=True)
class NamedHint:
    """A plain identifier such as ``User``, ``\\App\\User`` or ``int``."""

    name: str


@dataclass(frozen=True)
class NullableHint:
    inner: Hint


@dataclass(frozen=True)
class UnionHint:
    members: tuple[Hint, ...]


@dataclass(frozen=True)
class IntersectionHint:
    members: tuple[Hint, ...]


@dataclass(frozen=True)
class ParenthesizedHint:
    inner: Hint


@dataclass(frozen=True)
class UnsupportedHint:
    kind: str


Hint = Union[
    NamedHint,
    NullableHint,
    UnionHint,
    IntersectionHint,
    ParenthesizedHint,
    UnsupportedHint,
]


# -- Class-like members -------------------------------------------------------


@dataclass(frozen=True)
class Property:
    hint: Hint | None = None
    names: tuple[str, ...] = ()


@dataclass(frozen=True)
class Parameter:
    name: str
    hint: Hint | None = None


@dataclass(frozen=True)
class Method:
    name: str
    parameters: tuple[Parameter, ...] = ()
    return_hint: Hint | None = None


@dataclass(frozen=True)
class TraitUse:
    names: tuple[str, ...]


@dataclass(frozen=True)
class UnsupportedMember:
    """Constants, enum cases and anything else without type references."""

    kind: str


Member = Union[Property, Method, TraitUse, UnsupportedMember]


# -- Statements ---------------------------------------------------------------


@dataclass(frozen=True)
class UseItem:
    name: str
    alias: str | None = None


@dataclass(frozen=True)
class Use:
    items: tuple[UseItem, ...]


@dataclass(frozen=True)
class ClassDecl:
    name: str
    extends: tuple[str, ...] = ()
    implements: tuple[str, ...] = ()
    members: tuple[Member, ...] = ()
    line: int | None = None


@dataclass(frozen=True)
class InterfaceDecl:
    name: str
    extends: tuple[str, ...] = ()
    members: tuple[Member, ...] = ()
    line: int | None = None


@dataclass(frozen=True)
class TraitDecl:
    name: str
    members: tuple[Member, ...] = ()
    line: int | None = None


@dataclass(frozen=True)
class EnumDecl:
    name: str
    backing_hint: Hint | None = None
    implements: tuple[str, ...] = ()
    members: tuple[Member, ...] = ()
    line: int | None = None


@dataclass(frozen=True)
class Namespace:
    """A ``namespace`` block; ``name`` is None for ``namespace { ... }``."""

    name: str | None
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class UnsupportedStatement:
    kind: str


Statement = Union[
    Namespace,
    Use,
    ClassDecl,
    InterfaceDecl,
    TraitDecl,
    EnumDecl,
    UnsupportedStatement,
]

ClassLike = Union[ClassDecl, InterfaceDecl, TraitDecl, EnumDecl]


@dataclass(frozen=True)
class Program:
    statements: tuple[Statement, ...] = field(default_factory=tuple)
