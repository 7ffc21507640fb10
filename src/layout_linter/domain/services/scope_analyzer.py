"""
Name-based module scope index.

Used when the host supplies no scope manager. It does not model nested
scopes: a local binding that shadows an import counts as a use of the import,
which can only hide an unused import, never report a used one.
"""

from collections import defaultdict

from layout_linter.domain.entities import DeclaredVariable
from layout_linter.domain.nodes import ClassMember, Identifier, ImportDeclaration, MemberExpression, Node, Property

_DECLARING_PARENTS: frozenset[str] = frozenset(
    {
        "VariableDeclarator",
        "FunctionDeclaration",
        "FunctionExpression",
        "ClassDeclaration",
        "ClassExpression",
        "TSTypeAliasDeclaration",
        "TSInterfaceDeclaration",
        "TSEnumDeclaration",
        "TSModuleDeclaration",
        "TSTypeParameter",
    }
)
_LABEL_PARENTS: frozenset[str] = frozenset({"LabeledStatement", "BreakStatement", "ContinueStatement"})
_IDENTIFIER_TYPES: frozenset[str] = frozenset({"Identifier", "JSXIdentifier"})


class ModuleScopeAnalyzer:
    """Indexes identifier references of one program by name."""

    def __init__(self, program: Node) -> None:
        self._references: dict[str, list[Identifier]] = defaultdict(list)
        self._index(program)

    def references_to(self, name: str) -> tuple[Identifier, ...]:
        return tuple(self._references.get(name, ()))

    def get_declared_variables(self, node: ImportDeclaration) -> list[DeclaredVariable] | None:
        """One variable per specifier, with the references found for its local name."""
        variables: list[DeclaredVariable] = []
        for specifier in node.specifiers:
            local = specifier.local
            if local is None or not local.name:
                continue
            variables.append(
                DeclaredVariable(
                    name=local.name,
                    identifiers=(local,),
                    references=self.references_to(local.name),
                )
            )
        return variables

    def _index(self, program: Node) -> None:
        stack: list[tuple[Node, Node | None, str]] = [(program, None, "")]
        while stack:
            node, parent, key = stack.pop()
            if node.type == "ImportDeclaration":
                continue
            if isinstance(node, Identifier) and node.type in _IDENTIFIER_TYPES:
                if node.name and self.is_reference(parent, key):
                    self._references[node.name].append(node)
            # type annotations hang off identifiers
            for child_key, child in reversed(node.children):
                stack.append((child, node, child_key))

    @staticmethod
    def is_reference(parent: Node | None, key: str) -> bool:
        """False for names that declare, label, alias or select a property."""
        if parent is None:
            return True
        if isinstance(parent, MemberExpression) and key == "property":
            return parent.computed
        if parent.type == "JSXMemberExpression" and key == "property":
            return False
        if isinstance(parent, (Property, ClassMember)) and key == "key":
            return parent.computed
        if parent.type in _DECLARING_PARENTS and key == "id":
            return False
        if parent.type in _LABEL_PARENTS and key == "label":
            return False
        if parent.type == "ExportSpecifier" and key == "exported":
            return False
        if parent.type == "JSXAttribute" and key == "name":
            return False
        if parent.type == "TSQualifiedName" and key == "right":
            return False
        return True
