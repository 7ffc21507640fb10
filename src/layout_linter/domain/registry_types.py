from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    display_name: str
    short_description: str
    fix_type: str
    messages: dict[str, str]
    manual_instructions: str
    references: list[str]
