"""Command parsing package."""

from travel_budget.parsing.commands import (
    COMMAND_PATTERNS,
    CommandParser,
    CommandPattern,
)

__all__ = ["COMMAND_PATTERNS", "CommandParser", "CommandPattern"]
