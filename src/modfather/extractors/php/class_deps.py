"""Extract class-level dependencies from PHP declarations."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass

from modfather.extractors.php.names import (
    ImportTable,
    is_class_type,
    qualify,
    resolve_class_name,
)
from modfather.extractors.php.syntax import (
    ClassDecl,
    ClassLike,
    EnumDecl,
    Hint,
    InterfaceDecl,
    IntersectionHint,
    Member,
    Method,
    NamedHint,
    Namespace,
    NullableHint,
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
)
from modfather.model import DependencyGraph, Edge, Node

logger = logging.getLogger(__name__)

_KINDS = {
    ClassDecl: "class",
    InterfaceDecl: "interface",
    TraitDecl: "trait",
    EnumDecl: "enum",
}


@dataclass
class Declaration:
    """A declared class-like entity and where it came from."""

    name: str
    file_path: str
    namespace: str | None
    kind: str


class ClassDependencyAnalyzer:
    """Accumulate declarations and their type dependencies across files."""

    def __init__(self) -> None:
        self.classes: dict[str, Declaration] = {}
        self.dependencies: dict[str, set[str]] = defaultdict(set)
        self._pairs: list[tuple[str, str]] = []

    # -- Analyzer protocol -----------------------------------------------------

    def analyze(self, file_path: str, content: str | bytes) -> None:
        from modfather.extractors.php.parser import parse_source

        result = parse_source(content)
        if result.has_error:
            logger.warning("Parse error in %s; analyzing partial tree", file_path)
        self.visit(result.program, file_path)

    def build_graph(self, include_external: bool = False) -> DependencyGraph:
        graph = DependencyGraph()

        for name, decl in self.classes.items():
            graph.add_node(
                Node(name, name)
                .with_metadata("file", decl.file_path)
                .with_metadata("type", "internal")
                .with_metadata("kind", decl.kind)
            )

        for source, targets in self.dependencies.items():
            for target in sorted(targets):
                if target not in self.classes:
                    if not include_external:
                        continue
                    if target not in graph.nodes:
                        graph.add_node(
                            Node(target, target).with_metadata("type", "external")
                        )
                graph.add_edge(Edge(source, target))

        return graph

    # -- Visiting --------------------------------------------------------------

    def visit(self, program: Program, file_path: str) -> list[tuple[str, str]]:
        """Visit one file's tree and return the dependency pairs it contributed."""
        self._pairs = []
        imports = ImportTable()
        for statement in program.statements:
            self._visit_statement(statement, file_path, None, imports)

        pairs = list(dict.fromkeys(self._pairs))
        self._pairs = []
        return pairs

    def _visit_statement(
        self,
        statement: Statement,
        file_path: str,
        namespace: str | None,
        imports: ImportTable,
    ) -> None:
        if isinstance(statement, Use):
            imports.add_use(statement)
        elif isinstance(statement, Namespace):
            # Namespace blocks never inherit imports from the enclosing scope.
            ns_imports = ImportTable()
            ns_name = statement.name or None
            for stmt in statement.statements:
                self._visit_statement(stmt, file_path, ns_name, ns_imports)
        elif isinstance(statement, (ClassDecl, InterfaceDecl, TraitDecl, EnumDecl)):
            self._visit_class_like(statement, file_path, namespace, imports)
        elif isinstance(statement, UnsupportedStatement):
            pass

    def _visit_class_like(
        self,
        decl: ClassLike,
        file_path: str,
        namespace: str | None,
        imports: ImportTable,
    ) -> None:
        if not decl.name:
            return
        fqn = qualify(decl.name, namespace)
        self.classes[fqn] = Declaration(
            name=fqn,
            file_path=file_path,
            namespace=namespace,
            kind=_KINDS[type(decl)],
        )

        supertypes: tuple[str, ...] = ()
        if isinstance(decl, ClassDecl):
            supertypes = decl.extends + decl.implements
        elif isinstance(decl, InterfaceDecl):
            supertypes = decl.extends
        elif isinstance(decl, EnumDecl):
            supertypes = decl.implements
            if decl.backing_hint is not None:
                self._visit_hint(decl.backing_hint, fqn, namespace, imports)

        for parent in supertypes:
            self._add_dependency(fqn, resolve_class_name(parent, namespace, imports))

        # Interfaces only contribute their parents.
        if isinstance(decl, InterfaceDecl):
            return
        for member in decl.members:
            self._visit_member(member, fqn, namespace, imports)

    def _visit_member(
        self,
        member: Member,
        current: str,
        namespace: str | None,
        imports: ImportTable,
    ) -> None:
        if isinstance(member, TraitUse):
            for trait_name in member.names:
                self._add_dependency(
                    current, resolve_class_name(trait_name, namespace, imports)
                )
        elif isinstance(member, Property):
            if member.hint is not None:
                self._visit_hint(member.hint, current, namespace, imports)
        elif isinstance(member, Method):
            if member.return_hint is not None:
                self._visit_hint(member.return_hint, current, namespace, imports)
            for param in member.parameters:
                if param.hint is not None:
                    self._visit_hint(param.hint, current, namespace, imports)
        elif isinstance(member, UnsupportedMember):
            pass

    def _visit_hint(
        self,
        hint: Hint,
        current: str,
        namespace: str | None,
        imports: ImportTable,
    ) -> None:
        if isinstance(hint, NamedHint):
            if hint.name and is_class_type(hint.name):
                self._add_dependency(
                    current, resolve_class_name(hint.name, namespace, imports)
                )
        elif isinstance(hint, (NullableHint, ParenthesizedHint)):
            self._visit_hint(hint.inner, current, namespace, imports)
        elif isinstance(hint, (UnionHint, IntersectionHint)):
            for inner in hint.members:
                self._visit_hint(inner, current, namespace, imports)
        elif isinstance(hint, UnsupportedHint):
            pass

    def _add_dependency(self, source: str, target: str) -> None:
        if not target:
            return
        self.dependencies[source].add(target)
        self._pairs.append((source, target))
