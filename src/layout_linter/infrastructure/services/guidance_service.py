"""GuidanceService: loads the rule registry and provides display names, messages and manual_instructions."""

from pathlib import Path
from typing import cast

import yaml

from layout_linter.domain.constants import LAYOUT_LINTER_PREFIX
from layout_linter.domain.protocols import GuidanceServiceProtocol
from layout_linter.domain.registry_types import RuleRegistryEntry


class GuidanceService(GuidanceServiceProtocol):
    """Loads rule_registry.yaml; entries are keyed ``layout.<rule-name>`` plus ``layout._default``."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
        else:
            self._registry = {}

    def get_entry(self, rule_name: str) -> RuleRegistryEntry | None:
        """Return the full registry entry for a rule, or None."""
        entry = self._registry.get(f"{LAYOUT_LINTER_PREFIX}{rule_name}")
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        return None

    def get_display_name(self, rule_name: str) -> str:
        """Return display name for a rule."""
        entry = self.get_entry(rule_name)
        if not entry:
            return rule_name.replace("-", " ").title()
        return str(entry.get("display_name") or entry.get("short_description") or rule_name.replace("-", " ").title())

    def get_message_template(self, rule_name: str, message_id: str) -> str | None:
        """Return the registry template for a message id, or None when the registry has none."""
        entry = self.get_entry(rule_name)
        if not entry:
            return None
        messages = entry.get("messages")
        if isinstance(messages, dict) and isinstance(messages.get(message_id), str):
            return str(messages[message_id])
        return None

    def get_manual_instructions(self, rule_name: str) -> str:
        """Return manual fix instructions for the given rule."""
        entry = self.get_entry(rule_name)
        if entry and "manual_instructions" in entry:
            return str(entry["manual_instructions"])
        default_entry = self._registry.get(f"{LAYOUT_LINTER_PREFIX}_default")
        if default_entry and "manual_instructions" in default_entry:
            return str(default_entry["manual_instructions"])
        return "See project docs. Fix the violation at the reported location."
