"""
Parser package for mudscript variable substitution.

Provides sigil-driven expansion of variable references using configurable
resolvers.
"""

from .base import (
    MAX_ITERATIONS,
    TokenResolver,
    VariableContext,
    VariableSetting,
    VariableSubstitutionEngine,
)
from .resolvers import MappingResolver, VariableResolver

__all__ = [
    "MAX_ITERATIONS",
    "TokenResolver",
    "VariableContext",
    "VariableSetting",
    "VariableSubstitutionEngine",
    "MappingResolver",
    "VariableResolver",
]
