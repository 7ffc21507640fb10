"""Layout linter: statement grouping, padding and safe-removal rules for ESTree syntax trees."""

__version__ = "0.1.0"
