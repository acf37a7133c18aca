"""
Token resolvers for variable substitution.

Implements specific resolution strategies for different sigils:
- Variables: lookup in a `VariableStore` (the `$` sigil)
- Mappings: lookup in a plain dict, e.g. script arguments for `%`
"""

from typing import Mapping, Optional, Self
from mudscript.lib.variables import VariableStore


class VariableResolver:
    """Resolver backed by a `VariableStore`."""

    def __init__(self: Self, store: VariableStore) -> None:
        self.store: VariableStore = store

    def resolve(self: Self, token_value: str) -> Optional[str]:
        """Current value of variable `token_value`, or None if unset."""
        return self.store.get(token_value)


class MappingResolver:
    """Resolver backed by a read-only mapping.

    Values are looked up at resolve time, so the mapping may change between
    substitutions.
    """

    def __init__(self: Self, values: Mapping[str, str]) -> None:
        self.values: Mapping[str, str] = values

    def resolve(self: Self, token_value: str) -> Optional[str]:
        return self.values.get(token_value)
