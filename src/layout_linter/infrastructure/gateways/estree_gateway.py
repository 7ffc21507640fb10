"""ESTree Gateway - decodes ESTree JSON into the typed node variants of the domain."""

import json
import logging
from collections.abc import Callable, Iterator
from typing import Any

from layout_linter.domain.nodes import (
    AssignmentExpression,
    BlockStatement,
    CallExpression,
    ClassBody,
    ClassMember,
    ExpressionStatement,
    Identifier,
    ImportDeclaration,
    ImportSpecifier,
    Literal,
    MemberExpression,
    Node,
    Program,
    Property,
    Range,
    TemplateElement,
    TemplateLiteral,
    UnaryExpression,
    VariableDeclaration,
    VariableDeclarator,
    WrappedExpression,
)
from layout_linter.domain.protocols import EstreeProtocol, FileSystemProtocol
from layout_linter.domain.source import OffsetMap

logger = logging.getLogger(__name__)

RawNode = dict[str, Any]

_CLASS_MEMBER_TYPES: frozenset[str] = frozenset(
    {
        "MethodDefinition",
        "PropertyDefinition",
        "AccessorProperty",
        "TSPropertySignature",
        "TSMethodSignature",
        "TSIndexSignature",
        "TSCallSignatureDeclaration",
        "TSAbstractMethodDefinition",
        "TSAbstractPropertyDefinition",
        "TSAbstractAccessorProperty",
    }
)


class AstDecodeError(ValueError):
    """Raised when input is not an ESTree tree (bad JSON, or no ``Program`` at the root)."""


class _Resolver:
    """Looks up already-built children of the node being built."""

    def __init__(self, raw: RawNode, built: dict[int, Node]) -> None:
        self.raw = raw
        self._built = built

    def node(self, key: str) -> Node | None:
        value = self.raw.get(key)
        if EstreeGateway.is_raw_node(value):
            return self._built.get(id(value))
        return None

    def nodes(self, key: str) -> tuple[Node, ...]:
        value = self.raw.get(key)
        if not isinstance(value, list):
            return ()
        return tuple(self._built[id(item)] for item in value if EstreeGateway.is_raw_node(item))

    def string(self, key: str) -> str | None:
        value = self.raw.get(key)
        return value if isinstance(value, str) else None

    def flag(self, key: str) -> bool:
        return self.raw.get(key) is True


class EstreeGateway(EstreeProtocol):
    """
    Decodes ESTree objects (as produced by oxc, typescript-estree, espree or acorn).

    Each object is decoded exactly once, bottom-up with an explicit stack, so
    deeply nested trees cannot exhaust the interpreter stack. Positions come
    from ``range: [start, end]`` or from ``start``/``end``. Kinds without a
    dedicated variant decode to a plain ``Node`` carrying only its children.
    """

    SKIPPED_KEYS: frozenset[str] = frozenset({"type", "parent", "loc", "range", "start", "end"})

    def __init__(self, filesystem: FileSystemProtocol | None = None) -> None:
        self._filesystem = filesystem
        self._builders: dict[str, Callable[[_Resolver, dict[str, Any]], Node]] = {
            "Program": lambda r, base: Program(**base, body=r.nodes("body")),
            "BlockStatement": lambda r, base: BlockStatement(**base, body=r.nodes("body")),
            "ClassBody": lambda r, base: ClassBody(**base, body=r.nodes("body")),
            "ExpressionStatement": lambda r, base: ExpressionStatement(
                **base, expression=r.node("expression"), directive=r.string("directive")
            ),
            "VariableDeclaration": self._variable_declaration,
            "VariableDeclarator": lambda r, base: VariableDeclarator(**base, id=r.node("id"), init=r.node("init")),
            "Identifier": self._identifier,
            "JSXIdentifier": self._identifier,
            "ImportSpecifier": self._import_specifier,
            "ImportDefaultSpecifier": self._import_specifier,
            "ImportNamespaceSpecifier": self._import_specifier,
            "ImportDeclaration": self._import_declaration,
            "MemberExpression": lambda r, base: MemberExpression(
                **base,
                object=r.node("object"),
                property=r.node("property"),
                computed=r.flag("computed"),
                optional=r.flag("optional"),
            ),
            "CallExpression": self._call,
            "NewExpression": self._call,
            "ParenthesizedExpression": lambda r, base: WrappedExpression(**base, inner=r.node("expression")),
            "ChainExpression": lambda r, base: WrappedExpression(**base, inner=r.node("expression")),
            "AwaitExpression": lambda r, base: WrappedExpression(**base, inner=r.node("argument")),
            "UnaryExpression": self._unary,
            "UpdateExpression": self._unary,
            "AssignmentExpression": lambda r, base: AssignmentExpression(
                **base, operator=r.string("operator") or "=", left=r.node("left"), right=r.node("right")
            ),
            "Literal": self._literal,
            "TemplateElement": self._template_element,
            "TemplateLiteral": self._template_literal,
            "Property": lambda r, base: Property(
                **base,
                key=r.node("key"),
                value=r.node("value"),
                computed=r.flag("computed"),
                shorthand=r.flag("shorthand"),
            ),
        }
        for member_type in _CLASS_MEMBER_TYPES:
            self._builders[member_type] = self._class_member

    # ------------------------------------------------------------------
    # EstreeProtocol
    # ------------------------------------------------------------------

    def load_program(self, ast_path: str, offsets: OffsetMap | None = None) -> Program:
        """Read an ESTree JSON file and decode it."""
        if self._filesystem is None:
            raise AstDecodeError("No filesystem gateway configured for loading ESTree files")
        text = self._filesystem.read_text(ast_path)
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise AstDecodeError(f"{ast_path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
        return self.decode(raw, offsets)

    def decode(self, raw: object, offsets: OffsetMap | None = None) -> Program:
        """
        Decode an ESTree mapping. Accepts a ``Program`` or a Babel-style ``File`` wrapper.

        ``offsets`` converts range offsets into ``str`` indices of the source text;
        without it ranges are taken as ``str`` indices already.
        """
        if not self.is_raw_node(raw):
            raise AstDecodeError("ESTree root must be an object with a string 'type'")
        assert isinstance(raw, dict)
        if raw["type"] == "File" and self.is_raw_node(raw.get("program")):
            raw = raw["program"]
        if raw["type"] != "Program":
            raise AstDecodeError(f"ESTree root must be a Program, got {raw['type']!r}")
        program = self._build_tree(raw, offsets)
        assert isinstance(program, Program)
        logger.debug("Decoded ESTree program with %d top-level statements", len(program.body))
        return program

    # ------------------------------------------------------------------
    # Tree construction
    # ------------------------------------------------------------------

    @staticmethod
    def is_raw_node(value: object) -> bool:
        return isinstance(value, dict) and isinstance(value.get("type"), str)

    @staticmethod
    def read_range(raw: RawNode) -> Range | None:
        """``range`` first, then ``start``/``end``. Anything malformed means no position."""
        candidate = raw.get("range")
        if isinstance(candidate, (list, tuple)) and len(candidate) == 2:
            start, end = candidate
        else:
            start, end = raw.get("start"), raw.get("end")
        if not isinstance(start, int) or not isinstance(end, int):
            return None
        if isinstance(start, bool) or isinstance(end, bool) or start < 0 or end < start:
            return None
        return (start, end)

    @staticmethod
    def iter_raw_children(raw: RawNode) -> Iterator[tuple[str, RawNode]]:
        for key, value in raw.items():
            if key in EstreeGateway.SKIPPED_KEYS:
                continue
            if EstreeGateway.is_raw_node(value):
                yield key, value
            elif isinstance(value, list):
                for item in value:
                    if EstreeGateway.is_raw_node(item):
                        yield key, item

    def _build_tree(self, root: RawNode, offsets: OffsetMap | None = None) -> Node:
        built: dict[int, Node] = {}
        stack: list[tuple[RawNode, bool]] = [(root, False)]
        while stack:
            raw, expanded = stack.pop()
            if id(raw) in built:
                continue
            if not expanded:
                stack.append((raw, True))
                for _, child in self.iter_raw_children(raw):
                    if id(child) not in built:
                        stack.append((child, False))
                continue
            built[id(raw)] = self._build_node(raw, built, offsets)
        return built[id(root)]

    def _build_node(self, raw: RawNode, built: dict[int, Node], offsets: OffsetMap | None = None) -> Node:
        node_range = self.read_range(raw)
        if node_range is not None and offsets is not None and not offsets.is_identity:
            node_range = (offsets.to_index(node_range[0]), offsets.to_index(node_range[1]))
        children = [(key, built[id(child)]) for key, child in self.iter_raw_children(raw)]
        children.sort(key=lambda entry: entry[1].start if entry[1].start is not None else -1)
        base: dict[str, Any] = {
            "type": raw["type"],
            "range": node_range,
            "children": tuple(children),
        }
        builder = self._builders.get(raw["type"])
        if builder is None:
            return Node(**base)
        return builder(_Resolver(raw, built), base)

    # ------------------------------------------------------------------
    # Variant builders
    # ------------------------------------------------------------------

    @staticmethod
    def _variable_declaration(r: _Resolver, base: dict[str, Any]) -> Node:
        declarators = tuple(node for node in r.nodes("declarations") if isinstance(node, VariableDeclarator))
        return VariableDeclaration(**base, kind=r.string("kind") or "var", declarations=declarators)

    @staticmethod
    def _identifier(r: _Resolver, base: dict[str, Any]) -> Node:
        return Identifier(**base, name=r.string("name") or "")

    @staticmethod
    def _import_specifier(r: _Resolver, base: dict[str, Any]) -> Node:
        local = r.node("local")
        return ImportSpecifier(
            **base,
            local=local if isinstance(local, Identifier) else None,
            import_kind=r.string("importKind"),
        )

    @staticmethod
    def _import_declaration(r: _Resolver, base: dict[str, Any]) -> Node:
        specifiers = tuple(node for node in r.nodes("specifiers") if isinstance(node, ImportSpecifier))
        return ImportDeclaration(
            **base, specifiers=specifiers, import_kind=r.string("importKind"), source=r.node("source")
        )

    @staticmethod
    def _call(r: _Resolver, base: dict[str, Any]) -> Node:
        return CallExpression(**base, callee=r.node("callee"), arguments=r.nodes("arguments"))

    @staticmethod
    def _unary(r: _Resolver, base: dict[str, Any]) -> Node:
        return UnaryExpression(**base, operator=r.string("operator") or "", argument=r.node("argument"))

    @staticmethod
    def _literal(r: _Resolver, base: dict[str, Any]) -> Node:
        value = r.raw.get("value")
        if not isinstance(value, (str, int, float, bool)):
            value = None
        return Literal(**base, value=value, raw=r.string("raw"))

    @staticmethod
    def _template_element(r: _Resolver, base: dict[str, Any]) -> Node:
        value = r.raw.get("value")
        if isinstance(value, dict):
            cooked = value.get("cooked")
            raw_text = value.get("raw")
        else:
            cooked = raw_text = value
        return TemplateElement(
            **base,
            cooked=cooked if isinstance(cooked, str) else None,
            raw=raw_text if isinstance(raw_text, str) else None,
        )

    @staticmethod
    def _template_literal(r: _Resolver, base: dict[str, Any]) -> Node:
        quasis = tuple(node for node in r.nodes("quasis") if isinstance(node, TemplateElement))
        return TemplateLiteral(**base, quasis=quasis, expressions=r.nodes("expressions"))

    @staticmethod
    def _class_member(r: _Resolver, base: dict[str, Any]) -> Node:
        return ClassMember(
            **base,
            kind=r.string("kind"),
            accessibility=r.string("accessibility"),
            static=r.flag("static"),
            abstract=r.flag("abstract") or str(base["type"]).startswith("TSAbstract"),
            decorators=r.nodes("decorators"),
            key=r.node("key"),
            computed=r.flag("computed"),
        )
