"""Decoded ESTree node variants.

Every ESTree object is decoded once (see ``EstreeGateway``) into one of the
frozen variants below. Kinds whose discriminant is all the rules need
(``FunctionDeclaration``, ``IfStatement``, ``TSTypeAliasDeclaration``, ...)
stay plain ``Node`` instances.
"""

from dataclasses import dataclass, field

Range = tuple[int, int]
LiteralValue = str | int | float | bool | None


@dataclass(frozen=True)
class Node:
    """Base variant: discriminant, optional range (indices into the source str), ordered children."""

    type: str
    range: Range | None = None
    children: tuple[tuple[str, "Node"], ...] = field(default=(), repr=False, compare=False)

    @property
    def start(self) -> int | None:
        """Start offset, or None when the node carries no position data."""
        return self.range[0] if self.range is not None else None

    @property
    def end(self) -> int | None:
        """End offset (exclusive), or None when the node carries no position data."""
        return self.range[1] if self.range is not None else None


@dataclass(frozen=True)
class Program(Node):
    body: tuple[Node, ...] = ()


@dataclass(frozen=True)
class BlockStatement(Node):
    body: tuple[Node, ...] = ()


@dataclass(frozen=True)
class ClassBody(Node):
    body: tuple[Node, ...] = ()


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Node | None = None
    directive: str | None = None


@dataclass(frozen=True)
class VariableDeclarator(Node):
    id: Node | None = None
    init: Node | None = None


@dataclass(frozen=True)
class VariableDeclaration(Node):
    kind: str = "var"
    declarations: tuple[VariableDeclarator, ...] = ()


@dataclass(frozen=True)
class Identifier(Node):
    name: str = ""


@dataclass(frozen=True)
class ImportSpecifier(Node):
    """Named, default or namespace specifier; ``type`` tells which."""

    local: Identifier | None = None
    import_kind: str | None = None


@dataclass(frozen=True)
class ImportDeclaration(Node):
    specifiers: tuple[ImportSpecifier, ...] = ()
    import_kind: str | None = None
    source: Node | None = None


@dataclass(frozen=True)
class MemberExpression(Node):
    object: Node | None = None
    property: Node | None = None
    computed: bool = False
    optional: bool = False


@dataclass(frozen=True)
class CallExpression(Node):
    """``CallExpression`` or ``NewExpression``."""

    callee: Node | None = None
    arguments: tuple[Node, ...] = ()


@dataclass(frozen=True)
class WrappedExpression(Node):
    """Transparent wrapper: ``ParenthesizedExpression``, ``AwaitExpression`` or ``ChainExpression``."""

    inner: Node | None = None


@dataclass(frozen=True)
class UnaryExpression(Node):
    """``UnaryExpression`` or ``UpdateExpression``."""

    operator: str = ""
    argument: Node | None = None


@dataclass(frozen=True)
class AssignmentExpression(Node):
    operator: str = "="
    left: Node | None = None
    right: Node | None = None


@dataclass(frozen=True)
class Literal(Node):
    value: LiteralValue = None
    raw: str | None = None


@dataclass(frozen=True)
class TemplateElement(Node):
    cooked: str | None = None
    raw: str | None = None


@dataclass(frozen=True)
class TemplateLiteral(Node):
    quasis: tuple[TemplateElement, ...] = ()
    expressions: tuple[Node, ...] = ()


@dataclass(frozen=True)
class Property(Node):
    """Object literal or pattern property."""

    key: Node | None = None
    value: Node | None = None
    computed: bool = False
    shorthand: bool = False


@dataclass(frozen=True)
class ClassMember(Node):
    """Class or interface member carrying the fields member ordering needs."""

    kind: str | None = None
    accessibility: str | None = None
    static: bool = False
    abstract: bool = False
    decorators: tuple[Node, ...] = ()
    key: Node | None = None
    computed: bool = False


STATEMENT_LIST_TYPES: frozenset[str] = frozenset({"Program", "BlockStatement"})
FUNCTION_EXPRESSION_TYPES: frozenset[str] = frozenset({"FunctionExpression", "ArrowFunctionExpression"})
