"""
Statement classification.

``StatementClassifier`` assigns the semantic group tag used by the grouping
rule; ``CoarseStatementClassifier`` assigns the coarse kind used by the
padding table. Both are pure functions of node shape.
"""

from collections.abc import Callable, Iterator

from layout_linter.domain.constants import (
    DEFAULT_LOGGING_RECEIVERS,
    DEFAULT_THIS_LOGGING_RECEIVERS,
    GROUP_ASSIGN,
    GROUP_CALL,
    GROUP_CLASS,
    GROUP_CONTROL,
    GROUP_DELETE,
    GROUP_DIRECTIVE,
    GROUP_EXPORT,
    GROUP_FUNCTION,
    GROUP_IMPORT,
    GROUP_INTERFACE,
    GROUP_MUTATION,
    GROUP_OTHER,
    GROUP_TEST,
    GROUP_THIS_ASSIGN,
    GROUP_THIS_DELETE,
    GROUP_THIS_MUTATION,
    GROUP_TYPE,
    GROUP_USE_STRICT,
    KIND_DO,
    KIND_EXPRESSION,
    KIND_FOR,
    KIND_FUNCTION,
    KIND_IF,
    KIND_OTHER,
    KIND_RETURN,
    KIND_SWITCH,
    KIND_TRY,
    KIND_WHILE,
    TEST_BLOCK_CALLEES,
    VARIABLE_KINDS,
)
from layout_linter.domain.nodes import (
    FUNCTION_EXPRESSION_TYPES,
    AssignmentExpression,
    CallExpression,
    ExpressionStatement,
    Literal,
    MemberExpression,
    Node,
    UnaryExpression,
    VariableDeclaration,
)
from layout_linter.domain.rules.expressions import MemberChain, WrapperPeeler

StatementPredicate = Callable[[Node], bool]


class FunctionVariableDeclaration:
    """``const f = () => {}``: a declaration whose every initializer is a function."""

    @staticmethod
    def matches(node: Node | None) -> bool:
        if not isinstance(node, VariableDeclaration) or not node.declarations:
            return False
        return all(
            declarator.init is not None and declarator.init.type in FUNCTION_EXPRESSION_TYPES
            for declarator in node.declarations
        )


class StatementShapes:
    """Shape predicates over expression statements. No top-level functions."""

    @staticmethod
    def expression_of(node: Node) -> Node | None:
        if isinstance(node, ExpressionStatement):
            return node.expression
        return None

    @staticmethod
    def is_directive(node: Node) -> bool:
        expression = StatementShapes.expression_of(node)
        return isinstance(expression, Literal) and isinstance(expression.value, str)

    @staticmethod
    def is_use_strict(node: Node) -> bool:
        expression = StatementShapes.expression_of(node)
        return isinstance(expression, Literal) and expression.value == "use strict"

    @staticmethod
    def is_test_block(node: Node) -> bool:
        """``it(...)`` / ``describe(...)`` with a bare identifier callee."""
        call = WrapperPeeler.peel(StatementShapes.expression_of(node))
        return (
            isinstance(call, CallExpression)
            and call.type == "CallExpression"
            and MemberChain.is_identifier_named(call.callee, TEST_BLOCK_CALLEES)
        )

    @staticmethod
    def plain_assignment(node: Node) -> AssignmentExpression | None:
        expression = StatementShapes.expression_of(node)
        if isinstance(expression, AssignmentExpression) and expression.operator == "=":
            return expression
        return None

    @staticmethod
    def mutation_target(node: Node) -> Node | None:
        """Target of ``x += 1`` / ``x++``; None for anything else."""
        expression = StatementShapes.expression_of(node)
        if isinstance(expression, UnaryExpression) and expression.type == "UpdateExpression":
            return expression.argument
        if isinstance(expression, AssignmentExpression) and expression.operator != "=":
            return expression.left
        return None

    @staticmethod
    def is_mutation(node: Node) -> bool:
        expression = StatementShapes.expression_of(node)
        if isinstance(expression, UnaryExpression) and expression.type == "UpdateExpression":
            return True
        return isinstance(expression, AssignmentExpression) and expression.operator != "="

    @staticmethod
    def delete_target(node: Node) -> Node | None:
        expression = StatementShapes.expression_of(node)
        if (
            isinstance(expression, UnaryExpression)
            and expression.type == "UnaryExpression"
            and expression.operator == "delete"
        ):
            return expression.argument
        return None

    @staticmethod
    def is_delete(node: Node) -> bool:
        expression = StatementShapes.expression_of(node)
        return (
            isinstance(expression, UnaryExpression)
            and expression.type == "UnaryExpression"
            and expression.operator == "delete"
        )


class StatementClassifier:
    """
    Maps a statement to exactly one group tag.

    The predicate list is evaluated in a fixed precedence order and the first
    match wins. ``this``-rooted writes are tested before the generic
    assign/mutation/delete tags. Logging calls never classify as ``call``.
    """

    def __init__(
        self,
        logging_receivers: frozenset[str] = DEFAULT_LOGGING_RECEIVERS,
        this_logging_receivers: frozenset[str] = DEFAULT_THIS_LOGGING_RECEIVERS,
        merge_variable_kinds: bool = False,
    ) -> None:
        self._merge_variable_kinds = merge_variable_kinds
        self._logging_receivers = frozenset(logging_receivers)
        self._this_logging_receivers = frozenset(this_logging_receivers)
        self._precedence: tuple[tuple[StatementPredicate, str], ...] = (
            (StatementShapes.is_directive, GROUP_DIRECTIVE),
            (StatementShapes.is_use_strict, GROUP_USE_STRICT),
            (lambda node: node.type == "ImportDeclaration", GROUP_IMPORT),
            (lambda node: node.type == "ExportAllDeclaration", GROUP_EXPORT),
            (lambda node: node.type == "TSTypeAliasDeclaration", GROUP_TYPE),
            (lambda node: node.type == "TSInterfaceDeclaration", GROUP_INTERFACE),
            (lambda node: node.type == "FunctionDeclaration", GROUP_FUNCTION),
            (lambda node: node.type == "ClassDeclaration", GROUP_CLASS),
            (StatementShapes.is_test_block, GROUP_TEST),
            (self._is_this_assignment, GROUP_THIS_ASSIGN),
            (self._is_this_mutation, GROUP_THIS_MUTATION),
            (self._is_this_delete, GROUP_THIS_DELETE),
            (lambda node: StatementShapes.plain_assignment(node) is not None, GROUP_ASSIGN),
            (StatementShapes.is_mutation, GROUP_MUTATION),
            (StatementShapes.is_delete, GROUP_DELETE),
            (self.is_call_statement, GROUP_CALL),
        )

    @property
    def logging_receivers(self) -> frozenset[str]:
        return self._logging_receivers

    def classify(self, node: Node | None) -> str:
        """Return the group tag of ``node``; ``other`` when nothing matches."""
        if node is None:
            return GROUP_OTHER
        for predicate, tag in self._precedence:
            if predicate(node):
                return tag
        if isinstance(node, VariableDeclaration):
            if FunctionVariableDeclaration.matches(node):
                return GROUP_FUNCTION
            if self._merge_variable_kinds or node.kind not in VARIABLE_KINDS:
                return "var"
            return node.kind
        if node.type == "TryStatement":
            return GROUP_CONTROL
        return GROUP_OTHER

    def is_logging_call(self, expression: Node | None) -> bool:
        """``console.x()``, ``logger.x()`` or ``this.logger.x()`` (receivers configurable)."""
        call = WrapperPeeler.peel(expression)
        if not isinstance(call, CallExpression) or call.type != "CallExpression":
            return False
        callee = call.callee
        if not isinstance(callee, MemberExpression):
            return False
        receiver = callee.object
        return MemberChain.is_identifier_named(
            receiver, self._logging_receivers
        ) or MemberChain.is_this_member_named(receiver, self._this_logging_receivers)

    def is_call_statement(self, node: Node) -> bool:
        expression = StatementShapes.expression_of(node)
        if expression is None or self.is_logging_call(expression):
            return False
        return isinstance(WrapperPeeler.peel(expression), CallExpression)

    @staticmethod
    def _is_this_assignment(node: Node) -> bool:
        assignment = StatementShapes.plain_assignment(node)
        return assignment is not None and MemberChain.is_rooted_at_this(assignment.left)

    @staticmethod
    def _is_this_mutation(node: Node) -> bool:
        target = StatementShapes.mutation_target(node)
        return target is not None and MemberChain.is_rooted_at_this(target)

    @staticmethod
    def _is_this_delete(node: Node) -> bool:
        target = StatementShapes.delete_target(node)
        return target is not None and MemberChain.is_rooted_at_this(target)


class StatementList:
    """Adjacent statement pairs of a ``Program`` or ``BlockStatement``, left to right."""

    @staticmethod
    def positioned_pairs(node: Node) -> Iterator[tuple[Node, Node, int, int]]:
        """Yield ``(prev, next, prev_end, next_start)``; pairs lacking position data are skipped."""
        body = getattr(node, "body", ())
        for prev, following in zip(body, body[1:]):
            if prev.end is None or following.start is None:
                continue
            yield prev, following, prev.end, following.start


class CoarseStatementClassifier:
    """Coarse statement kinds for the padding table."""

    _KIND_BY_TYPE: dict[str, str] = {
        "FunctionDeclaration": KIND_FUNCTION,
        "ExpressionStatement": KIND_EXPRESSION,
        "IfStatement": KIND_IF,
        "ForStatement": KIND_FOR,
        "ForInStatement": KIND_FOR,
        "ForOfStatement": KIND_FOR,
        "WhileStatement": KIND_WHILE,
        "DoWhileStatement": KIND_DO,
        "SwitchStatement": KIND_SWITCH,
        "TryStatement": KIND_TRY,
        "ReturnStatement": KIND_RETURN,
    }

    @staticmethod
    def classify(node: Node | None) -> str:
        if node is None:
            return KIND_OTHER
        if isinstance(node, VariableDeclaration):
            if FunctionVariableDeclaration.matches(node):
                return KIND_FUNCTION
            return node.kind if node.kind in VARIABLE_KINDS else "var"
        return CoarseStatementClassifier._KIND_BY_TYPE.get(node.type, KIND_OTHER)
