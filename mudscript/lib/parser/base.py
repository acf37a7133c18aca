r"""
Variable substitution engine.

Expands sigil-marked references (`$name`, `%1`, ...) inside arbitrary text
using one resolver per sigil. Values may themselves contain references, so
expansion repeats until the text stops changing, no sigil remains, or the
iteration bound is reached. The bound guarantees termination for
self-referential bindings such as `x -> "$x"`.

The engine handles:
- A fast path returning text without any registered sigil untouched
- Indexed access: `$list[1]` / `$list(1)` picks the element of a
  `|`-separated value
- A cascade of three identifier patterns per sigil, most permissive first,
  so `$name.` resolves `name` once `name.` fails to resolve
- Unresolved references and out-of-range indices left verbatim

Example:
    engine = VariableSubstitutionEngine()
    context = VariableContext()
    context.add("$", VariableResolver(store))
    engine.replace("go $dir", context)
"""

import re
from dataclasses import dataclass
from typing import Final, Optional, Protocol, Self, runtime_checkable
from mudscript.lib.parser.indexed import (
    BRACKETS,
    IndexedVar,
    PlainText,
    indexed_tokenize,
)
from mudscript.lib.parser.resolvers import VariableResolver
from mudscript.lib.regex import Regex, RegexEngine
from mudscript.lib.variables import VariableStore

MAX_ITERATIONS: Final[int] = 15

# Most permissive first; each later class retries names the earlier one
# over-consumed (trailing '.', then trailing '-' or '_').
IDENTIFIER_CLASSES: Final[tuple[str, ...]] = (
    r"[a-zA-Z0-9_\-.]+",
    r"[a-zA-Z0-9_\-]+",
    r"[a-zA-Z0-9]+",
)

_INDEX_RE: Final[re.Pattern] = re.compile(r"[0-9]+")


@runtime_checkable
class TokenResolver(Protocol):
    """Protocol defining the resolver interface for sigil substitution.

    Resolvers return the value bound to a name, or None when the name is
    unknown, in which case the reference is left in the text.
    """

    def resolve(self: Self, token_value: str) -> Optional[str]: ...


@dataclass(frozen=True)
class VariableSetting:
    """A sigil paired with the resolver for names that follow it."""

    token: str
    resolver: TokenResolver


class VariableContext:
    """Ordered set of `VariableSetting`s driving one substitution."""

    def __init__(self: Self, settings: Optional[list[VariableSetting]] = None) -> None:
        self.settings: list[VariableSetting] = list(settings or [])

    @property
    def keys(self: Self) -> list[str]:
        """Distinct sigils, in registration order."""
        return list(dict.fromkeys(setting.token for setting in self.settings))

    def add(self: Self, token: str, resolver: TokenResolver) -> None:
        if not token:
            raise ValueError("Sigil cannot be empty")
        self.settings.append(VariableSetting(token=token, resolver=resolver))


class VariableSubstitutionEngine:
    """Stateless expander; safe to share between threads.

    Attributes:
        regex: Pattern cache, shared with whoever else compiles patterns
    """

    def __init__(self: Self, regex: Optional[RegexEngine] = None) -> None:
        self.regex: RegexEngine = regex if regex is not None else RegexEngine()

    def replace_globals(self: Self, input_text: str, store: VariableStore) -> str:
        """Expand `$` references against a variable store."""
        context: VariableContext = VariableContext()
        context.add("$", VariableResolver(store))
        return self.replace(input_text, context)

    def replace(self: Self, input_text: str, context: VariableContext) -> str:
        """Expand every resolvable reference in `input_text`.

        Args:
            input_text: Text possibly containing references
            context: Sigils and their resolvers

        Returns:
            Expanded text; identical to the input when it holds no sigil
        """
        if not self.has_potential_vars(input_text, context):
            return input_text

        result: str = input_text
        for _ in range(MAX_ITERATIONS):
            last: str = result
            result = self.replace_indexed(result, context)
            for setting in context.settings:
                result = self._simplify(setting.token, result, setting.resolver)
            if result == last or not self.has_potential_vars(result, context):
                break
        return result

    def replace_indexed(self: Self, text: str, context: VariableContext) -> str:
        """Resolve `name[index]` and `name(index)` forms.

        The element is substituted when the index is a non-negative integer
        within the `|`-separated list the name expands to. Otherwise the form
        is kept, with its name and index expanded.
        """
        if "[" not in text and "(" not in text:
            return text

        tokens = indexed_tokenize(text, context.keys)
        if not any(isinstance(token, IndexedVar) for token in tokens):
            return text

        results: list[str] = []
        for token in tokens:
            if isinstance(token, PlainText):
                results.append(token.text)
                continue

            name: str = self._expand_part(token.name, context)
            index: str = self._expand_part(token.index, context)
            element: Optional[str] = None
            if name != token.name and _INDEX_RE.fullmatch(index):
                items: list[str] = name.split("|")
                number: int = int(index)
                if number < len(items):
                    element = items[number]

            if element is None:
                results.append(f"{name}{token.open}{index}{BRACKETS[token.open]}")
            else:
                results.append(element)

        return "".join(results)

    def _expand_part(self: Self, part: str, context: VariableContext) -> str:
        """Expand the name or index of an indexed form.

        Nested indexed forms are resolved first; `part` is a strict substring
        of the text being expanded, so this recursion always bottoms out. The
        sigil passes then run under their own iteration bound and never
        re-enter the indexed pass.
        """
        result: str = self.replace_indexed(part, context)
        for _ in range(MAX_ITERATIONS):
            if not self.has_potential_vars(result, context):
                break
            last: str = result
            for setting in context.settings:
                result = self._simplify(setting.token, result, setting.resolver)
            if result == last:
                break
        return result

    def has_potential_vars(self: Self, text: str, context: VariableContext) -> bool:
        return any(key in text for key in context.keys)

    def _simplify(self: Self, token: str, target: str, resolver: TokenResolver) -> str:
        """Run the identifier cascade for one sigil over `target`."""
        if token not in target:
            return target

        for identifier in IDENTIFIER_CLASSES:
            regex: Regex = self.regex.compile(f"({re.escape(token)}({identifier}))")
            for match in reversed(regex.all_matches(target)):
                key: Optional[str] = match.value_at(2)
                span: Optional[tuple[int, int]] = match.range_of(0)
                if key is None or span is None:
                    continue

                value: Optional[str] = resolver.resolve(key)
                if value is None:
                    continue

                target = target[: span[0]] + value + target[span[1] :]
        return target
