"""Tests for variable substitution."""

from unittest.mock import Mock
import pytest
from mudscript.lib.parser import (
    MAX_ITERATIONS,
    MappingResolver,
    VariableContext,
    VariableResolver,
    VariableSubstitutionEngine,
)
from mudscript.lib.regex import RegexEngine
from mudscript.lib.variables import GlobalVariables


@pytest.fixture
def engine() -> VariableSubstitutionEngine:
    return VariableSubstitutionEngine()


def context_of(**values: str) -> VariableContext:
    context = VariableContext()
    context.add("$", MappingResolver(values))
    return context


def test_text_without_sigils_is_returned_unchanged(
    engine: VariableSubstitutionEngine,
) -> None:
    resolver = Mock()
    context = VariableContext()
    context.add("$", resolver)
    text = "look at the [shiny] (thing)"
    assert engine.replace(text, context) is text
    resolver.resolve.assert_not_called()


def test_basic_substitution(engine: VariableSubstitutionEngine) -> None:
    assert engine.replace("go $dir now", context_of(dir="north")) == "go north now"


def test_multiple_substitutions(engine: VariableSubstitutionEngine) -> None:
    context = context_of(a="first", b="second")
    assert engine.replace("$a and $b", context) == "first and second"


def test_unresolved_reference_is_left_verbatim(
    engine: VariableSubstitutionEngine,
) -> None:
    assert engine.replace("say $missing", context_of(dir="north")) == "say $missing"


def test_nested_values_are_expanded(engine: VariableSubstitutionEngine) -> None:
    context = context_of(greeting="hello $name", name="$first", first="Arneson")
    assert engine.replace("$greeting!", context) == "hello Arneson!"


def test_identifier_cascade(engine: VariableSubstitutionEngine) -> None:
    context = context_of(**{"name": "Bob", "a.b": "dotted", "x": "X"})
    assert engine.replace("Hi $name.", context) == "Hi Bob."
    assert engine.replace("$a.b", context) == "dotted"
    assert engine.replace("$x-ray $x_", context) == "X-ray X_"


def test_indexed_access(engine: VariableSubstitutionEngine) -> None:
    context = context_of(name="a|b|c")
    assert engine.replace("$name[1]", context) == "b"
    assert engine.replace("$name(2)", context) == "c"
    assert engine.replace("$name[0] and $name[2]", context) == "a and c"


def test_indexed_out_of_range_is_kept(engine: VariableSubstitutionEngine) -> None:
    context = context_of(name="a|b|c")
    assert engine.replace("$name[3]", context) == "a|b|c[3]"
    assert engine.replace("$name(x)", context) == "a|b|c(x)"
    assert engine.replace("$name[-1]", context) == "a|b|c[-1]"


def test_indexed_with_variable_index(engine: VariableSubstitutionEngine) -> None:
    context = context_of(name="a|b|c", pick="2")
    assert engine.replace("$name[$pick]", context) == "c"


def test_unresolved_indexed_name_is_kept(engine: VariableSubstitutionEngine) -> None:
    # An unknown name is never split, so index 0 does not collapse the form
    # to the bare reference `$nope`.
    assert engine.replace("$nope[0]", context_of(name="a")) == "$nope[0]"


def test_nested_indexed_index(engine: VariableSubstitutionEngine) -> None:
    context = context_of(name="a|b|c", pick="2|0")
    assert engine.replace("$name[$pick[0]]", context) == "c"
    assert engine.replace("$name[$pick[1]]", context) == "a"


def test_self_referential_indexed_binding_terminates(
    engine: VariableSubstitutionEngine,
) -> None:
    result = engine.replace("$x", context_of(x="$x[0]"))
    assert result.startswith("$x[0]")
    assert "$" in result


def test_mutually_referential_indexed_bindings_terminate(
    engine: VariableSubstitutionEngine,
) -> None:
    context = context_of(a="$b[0]", b="$a[0]")
    result = engine.replace("$a[0]", context)
    assert "$" in result
    assert result.endswith("[0]")


def test_brackets_without_variables_are_untouched(
    engine: VariableSubstitutionEngine,
) -> None:
    context = context_of(x="1")
    assert engine.replace("coin(0) $x", context) == "coin(0) 1"


def test_self_reference_terminates(engine: VariableSubstitutionEngine) -> None:
    assert engine.replace("$x", context_of(x="$x")) == "$x"


def test_growing_reference_stops_at_bound(engine: VariableSubstitutionEngine) -> None:
    resolver = Mock()
    resolver.resolve.side_effect = lambda key: "a$x"
    context = VariableContext()
    context.add("$", resolver)
    result = engine.replace("$x", context)
    # each iteration expands once per identifier pattern
    assert result == "a" * (MAX_ITERATIONS * 3) + "$x"
    assert resolver.resolve.call_count == MAX_ITERATIONS * 3


def test_multiple_sigils(engine: VariableSubstitutionEngine) -> None:
    context = VariableContext()
    context.add("$", MappingResolver({"target": "goblin"}))
    context.add("%", MappingResolver({"1": "attack"}))
    assert engine.replace("%1 $target", context) == "attack goblin"
    assert context.keys == ["$", "%"]


def test_empty_sigil_rejected() -> None:
    with pytest.raises(ValueError):
        VariableContext().add("", MappingResolver({}))


def test_non_ascii_text(engine: VariableSubstitutionEngine) -> None:
    context = context_of(who="Zoë")
    assert engine.replace("¡Hola $who! ¿qué tal $who?", context) == "¡Hola Zoë! ¿qué tal Zoë?"


def test_replace_globals(engine: VariableSubstitutionEngine, store: GlobalVariables) -> None:
    store.set("dirs", "north|east")
    assert engine.replace_globals("go $dirs[1] on $date", store) == "go east on 2021-11-12"


def test_variable_resolver(store: GlobalVariables) -> None:
    store.set("roomid", "42")
    resolver = VariableResolver(store)
    assert resolver.resolve("roomid") == "42"
    assert resolver.resolve("missing") is None


def test_shared_regex_cache() -> None:
    regex = RegexEngine()
    engine = VariableSubstitutionEngine(regex=regex)
    engine.replace("$a", context_of(a="1"))
    cached = len(regex)
    assert cached == 3
    engine.replace("$a $a", context_of(a="2"))
    assert len(regex) == cached
