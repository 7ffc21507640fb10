"""Expression shape helpers: transparent-wrapper peeling and member-chain roots."""

from layout_linter.domain.nodes import (
    Identifier,
    MemberExpression,
    Node,
    UnaryExpression,
    WrappedExpression,
)


class WrapperPeeler:
    """Strips semantically transparent wrappers to expose an expression's true shape."""

    TRANSPARENT_TYPES: frozenset[str] = frozenset(
        {"ParenthesizedExpression", "AwaitExpression", "ChainExpression"}
    )

    @staticmethod
    def peel(expression: Node | None) -> Node | None:
        """Unwrap parentheses, await, optional chains and ``void`` until a real node (or None)."""
        current = expression
        while current is not None:
            if isinstance(current, WrappedExpression) and current.type in WrapperPeeler.TRANSPARENT_TYPES:
                current = current.inner
                continue
            if (
                isinstance(current, UnaryExpression)
                and current.type == "UnaryExpression"
                and current.operator == "void"
            ):
                current = current.argument
                continue
            break
        return current


class MemberChain:
    """Queries over ``a.b.c`` member chains, walked iteratively."""

    @staticmethod
    def root_object(node: Node | None) -> Node | None:
        """Return the innermost object of a member chain (the node itself when not a member)."""
        current = node
        while isinstance(current, MemberExpression):
            current = current.object
        return current

    @staticmethod
    def is_rooted_at_this(node: Node | None) -> bool:
        """True for ``this.x``, ``this.a.b[c]`` and so on."""
        root = MemberChain.root_object(node)
        return root is not None and root.type == "ThisExpression"

    @staticmethod
    def is_identifier_named(node: Node | None, names: frozenset[str]) -> bool:
        return isinstance(node, Identifier) and node.name in names

    @staticmethod
    def is_this_member_named(node: Node | None, names: frozenset[str]) -> bool:
        """True for ``this.<name>`` with a non-computed property in ``names``."""
        return (
            isinstance(node, MemberExpression)
            and not node.computed
            and node.object is not None
            and node.object.type == "ThisExpression"
            and MemberChain.is_identifier_named(node.property, names)
        )
