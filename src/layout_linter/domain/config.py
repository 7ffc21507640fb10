"""Configuration for linter settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from layout_linter.domain.constants import ALL_RULES, DEFAULT_AST_SUFFIX, DEFAULT_OFFSET_UNIT, OFFSET_UNITS

logger = logging.getLogger(__name__)


class OptionReader:
    """Readers for loosely-typed option values. No top-level functions."""

    @staticmethod
    def as_mapping(raw: object) -> dict[str, object]:
        """Return ``raw`` when it is a table, else an empty dict."""
        return raw if isinstance(raw, dict) else {}

    @staticmethod
    def string_list(raw: object) -> list[str]:
        """Strings of a list; anything else (including non-string items) is ignored."""
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, str)]

    @staticmethod
    def string_set(raw: object, default: frozenset[str]) -> frozenset[str]:
        """Non-empty set of strings from a list, else ``default``."""
        values = OptionReader.string_list(raw)
        return frozenset(values) if values else default


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created by Infrastructure from (config_dict, tool_section). Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict, tool_section) at composition root.

    Recognised keys of ``[tool.layout-linter]``::

        rules = ["padding-line-between-statements", ...]   # default: all
        ast_suffix = ".ast.json"
        offset_unit = "utf-16"                             # or "utf-8", "codepoint"
        [tool.layout-linter.options.no-bracket-notation]
        allow = ["data-id"]
    """

    def __init__(
        self,
        config_dict: dict[str, object] | None = None,
        tool_section: dict[str, object] | None = None,
    ) -> None:
        """Set config once at construction. No mutable state after init."""
        self._config: dict[str, object] = dict(config_dict or {})
        self._tool_section: dict[str, object] = dict(tool_section or {})
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about configuration values that will be ignored."""
        raw_rules = config.get("rules")
        if raw_rules is not None:
            if not isinstance(raw_rules, list):
                logger.warning("Configuration Warning: 'rules' must be a list of rule names; enabling all rules.")
            else:
                unknown = [name for name in raw_rules if name not in ALL_RULES]
                if unknown:
                    logger.warning("Configuration Warning: unknown rules ignored: %s", ", ".join(map(str, unknown)))
        raw_unit = config.get("offset_unit")
        if raw_unit is not None and raw_unit not in OFFSET_UNITS:
            logger.warning(
                "Configuration Warning: unknown offset_unit %r; using %s.", raw_unit, DEFAULT_OFFSET_UNIT
            )
        raw_options = config.get("options")
        if raw_options is not None and not isinstance(raw_options, dict):
            logger.warning("Configuration Warning: 'options' must be a table; rule defaults are used.")

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def tool_section(self) -> dict[str, object]:
        return self._tool_section

    @property
    def enabled_rules(self) -> list[str]:
        """Configured rule names in catalog order; every rule when unset or invalid."""
        raw = self._config.get("rules")
        if not isinstance(raw, list):
            return list(ALL_RULES)
        requested = set(OptionReader.string_list(raw))
        return [name for name in ALL_RULES if name in requested]

    def rule_options(self, rule_name: str) -> object:
        """Loosely-typed options for one rule, parsed by the rule itself. None when unset."""
        options = OptionReader.as_mapping(self._config.get("options"))
        return options.get(rule_name)

    @property
    def ast_suffix(self) -> str:
        """Suffix appended to a source path to locate its ESTree JSON."""
        raw = self._config.get("ast_suffix", DEFAULT_AST_SUFFIX)
        return raw if isinstance(raw, str) and raw else DEFAULT_AST_SUFFIX

    @property
    def offset_unit(self) -> str:
        """Unit of the offsets in ESTree ranges: ``utf-16`` (JavaScript parsers), ``utf-8`` or ``codepoint``."""
        raw = self._config.get("offset_unit", DEFAULT_OFFSET_UNIT)
        return raw if raw in OFFSET_UNITS else DEFAULT_OFFSET_UNIT
