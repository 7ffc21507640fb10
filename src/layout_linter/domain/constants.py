"""Domain constants: group tags, coarse kinds, message ids and default tables."""

LAYOUT_LINTER_PREFIX: str = "layout."

# Rule names (stable, host-visible)
RULE_STATEMENT_GROUPS: str = "blank-lines-between-statement-groups"
RULE_PADDING_LINES: str = "padding-line-between-statements"
RULE_UNUSED_IMPORTS: str = "unused-imports"
RULE_BRACKET_NOTATION: str = "no-bracket-notation"
RULE_MEMBER_ORDERING: str = "member-ordering"

ALL_RULES: tuple[str, ...] = (
    RULE_STATEMENT_GROUPS,
    RULE_PADDING_LINES,
    RULE_UNUSED_IMPORTS,
    RULE_BRACKET_NOTATION,
    RULE_MEMBER_ORDERING,
)

# Message ids
MSG_EXPECTED_BLANK_LINE: str = "expectedBlankLine"
MSG_UNEXPECTED_BLANK_LINE: str = "unexpectedBlankLine"
MSG_UNUSED_IMPORT: str = "unusedImport"
MSG_UNUSED_IMPORT_DECLARATION: str = "unusedImportDeclaration"
MSG_BRACKET_NOTATION: str = "bracketNotation"
MSG_INVALID_ORDER: str = "invalidOrder"

# Group tags, in classifier precedence order
GROUP_DIRECTIVE: str = "directive"
GROUP_USE_STRICT: str = "use-strict"
GROUP_IMPORT: str = "import"
GROUP_EXPORT: str = "export"
GROUP_TYPE: str = "type"
GROUP_INTERFACE: str = "interface"
GROUP_FUNCTION: str = "function"
GROUP_CLASS: str = "class"
GROUP_TEST: str = "test"
GROUP_THIS_ASSIGN: str = "this-assign"
GROUP_THIS_MUTATION: str = "this-mutation"
GROUP_THIS_DELETE: str = "this-delete"
GROUP_ASSIGN: str = "assign"
GROUP_MUTATION: str = "mutation"
GROUP_DELETE: str = "delete"
GROUP_CALL: str = "call"
GROUP_CONTROL: str = "control"
GROUP_OTHER: str = "other"

GROUPS_SEPARATED_WITHIN: frozenset[str] = frozenset(
    {GROUP_TEST, GROUP_TYPE, GROUP_INTERFACE, GROUP_FUNCTION, GROUP_CLASS}
)

TEST_BLOCK_CALLEES: frozenset[str] = frozenset({"it", "describe"})
DEFAULT_LOGGING_RECEIVERS: frozenset[str] = frozenset({"console", "logger"})
DEFAULT_THIS_LOGGING_RECEIVERS: frozenset[str] = frozenset({"logger"})

# Coarse statement kinds used by the padding table
KIND_FUNCTION: str = "function"
KIND_EXPRESSION: str = "expression"
KIND_IF: str = "if"
KIND_FOR: str = "for"
KIND_WHILE: str = "while"
KIND_DO: str = "do"
KIND_SWITCH: str = "switch"
KIND_TRY: str = "try"
KIND_RETURN: str = "return"
KIND_OTHER: str = "other"
VARIABLE_KINDS: tuple[str, ...] = ("const", "let", "var")
CONTROL_KINDS: tuple[str, ...] = (KIND_IF, KIND_FOR, KIND_WHILE, KIND_DO, KIND_SWITCH, KIND_TRY)
WILDCARD_SELECTOR: str = "*"

BLANK_LINE_ALWAYS: str = "always"
BLANK_LINE_NEVER: str = "never"

LIST_SEPARATOR: str = ","
HORIZONTAL_WHITESPACE: str = " \t"

# Default member order for member-ordering
DEFAULT_MEMBER_ORDER: tuple[str, ...] = (
    "signature",
    "public-static-field",
    "protected-static-field",
    "private-static-field",
    "public-abstract-field",
    "public-decorated-field",
    "public-instance-field",
    "protected-abstract-field",
    "protected-decorated-field",
    "protected-instance-field",
    "private-decorated-field",
    "private-instance-field",
    "public-constructor",
    "protected-constructor",
    "private-constructor",
    "public-static-method",
    "protected-static-method",
    "private-static-method",
    "public-abstract-method",
    "public-decorated-method",
    "public-instance-method",
    "protected-abstract-method",
    "protected-decorated-method",
    "protected-instance-method",
    "private-decorated-method",
    "private-instance-method",
)

DEFAULT_AST_SUFFIX: str = ".ast.json"

# Unit of the offsets in ESTree ranges
OFFSET_UNIT_UTF16: str = "utf-16"
OFFSET_UNIT_UTF8: str = "utf-8"
OFFSET_UNIT_CODEPOINT: str = "codepoint"
OFFSET_UNITS: tuple[str, ...] = (OFFSET_UNIT_UTF16, OFFSET_UNIT_UTF8, OFFSET_UNIT_CODEPOINT)
DEFAULT_OFFSET_UNIT: str = OFFSET_UNIT_UTF16
