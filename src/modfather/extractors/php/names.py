"""PHP name resolution: per-scope import tables and fully qualified names."""

from __future__ import annotations

from modfather.extractors.php.syntax import Use, UseItem

NAMESPACE_SEPARATOR = "\\"

# Compared case-insensitively, as PHP does for reserved type names.
BUILTIN_TYPES = frozenset(
    {
        "int",
        "float",
        "string",
        "bool",
        "array",
        "object",
        "callable",
        "iterable",
        "void",
        "mixed",
        "never",
        "true",
        "false",
        "null",
        "self",
        "parent",
        "static",
    }
)


class ImportTable:
    """Short (or aliased) name -> fully qualified name for one lexical scope."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    def add_import(self, fully_qualified: str, alias: str | None = None) -> None:
        fully_qualified = fully_qualified.lstrip(NAMESPACE_SEPARATOR)
        short_name = alias or fully_qualified.rsplit(NAMESPACE_SEPARATOR, 1)[-1]
        self._entries[short_name] = fully_qualified

    def add_use(self, use: Use) -> None:
        for item in use.items:
            self.add_item(item)

    def add_item(self, item: UseItem) -> None:
        self.add_import(item.name, item.alias)

    def get(self, short_name: str) -> str | None:
        return self._entries.get(short_name)

    def __contains__(self, short_name: object) -> bool:
        return short_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ImportTable({self._entries!r})"


def qualify(name: str, namespace: str | None) -> str:
    """Return the fully qualified name of a declaration named *name*."""
    if namespace:
        return f"{namespace}{NAMESPACE_SEPARATOR}{name}"
    return name


def resolve_class_name(
    name: str, namespace: str | None, imports: ImportTable | None
) -> str:
    """Resolve a type reference to its fully qualified name.

    Leading-separator names are already absolute.  Otherwise an import for the
    exact short name wins, then the name is taken relative to the enclosing
    namespace, and finally it is left in the global namespace.  Multi-segment
    names are never matched against import prefixes.
    """
    if name.startswith(NAMESPACE_SEPARATOR):
        return name[1:]
    if imports is not None:
        imported = imports.get(name)
        if imported is not None:
            return imported
    return qualify(name, namespace)


def is_class_type(type_name: str) -> bool:
    """Return False for scalar and pseudo types that never become edges."""
    return type_name.lower() not in BUILTIN_TYPES


def namespace_of(fully_qualified: str) -> str | None:
    """Return the namespace prefix of *fully_qualified*, or None when global."""
    if NAMESPACE_SEPARATOR not in fully_qualified:
        return None
    return fully_qualified.rsplit(NAMESPACE_SEPARATOR, 1)[0]
