from itertools import permutations

from vex.binder import *
import pytest


def req(name):
	return ParameterSpec.required(name)

def opt(name, default):
	return ParameterSpec.optional(name, default)

def pos(value):
	return CallArgument(value)

def named(label, value):
	return CallArgument(value, label)


def test_exact_names_in_any_order():
	signature = [req("a"), req("b"), req("c")]
	expected = bind(signature, [pos(1), pos(2), pos(3)])
	assert expected == {"a": 1, "b": 2, "c": 3}
	for order in permutations([named("a", 1), named("b", 2), named("c", 3)]):
		assert bind(signature, list(order)) == expected


def test_abbreviated_label():
	signature = [req("longname_x"), req("y")]
	assert bind(signature, [named("y", 7), named("l", 6)]) == {"longname_x": 6, "y": 7}


def test_positional():
	signature = [req("longname_x"), req("y")]
	assert bind(signature, [pos(7), pos(8)]) == {"longname_x": 7, "y": 8}


def test_default():
	assert bind([opt("x", 99)], []) == {"x": 99}


def test_missing_argument():
	assert bind([req("x")], []) == MissingArgument("x")
	# The first missing one in declaration order is reported.
	assert bind([req("a"), opt("b", 0), req("c"), req("d")], [pos(1)]) == MissingArgument("c")


def test_ambiguous_label():
	assert bind([req("xa"), req("xb")], [named("x", 1)]) == AmbiguousLabel("x", ("xa", "xb"))


def test_too_many_arguments():
	assert bind([req("a"), req("b")], [pos(1), pos(2), pos(3)]) == TooManyArguments(3, 2)
	# Labelled arguments take their slots first.
	assert bind([req("a"), req("b"), req("c")],
			[named("a", 1), pos(2), pos(3), pos(4)]) == TooManyArguments(3, 2)


def test_unknown_label():
	assert bind([req("x")], [named("z", 1)]) == UnknownLabel("z")
	assert bind([req("x")], [named("", 1)]) == UnknownLabel("")


def test_exact_match_beats_prefix():
	# x is both a full name and a prefix of xy.
	assert bind([req("x"), req("xy")], [named("x", 1), pos(2)]) == {"x": 1, "xy": 2}
	# The exact pass runs first, whatever the call-site order.
	assert bind([req("xa"), req("xb")], [named("x", 2), named("xa", 1)]) == {"xa": 1, "xb": 2}


def test_prefix_ignores_exactly_claimed_parameters():
	signature = [req("longname"), req("y")]
	assert bind(signature, [named("longname", 1), named("l", 2)]) == UnknownLabel("l")


def test_duplicate_binding():
	assert bind([req("x"), req("y")], [named("x", 1), named("x", 2)]) == DuplicateBinding("x")
	assert bind([req("longname"), req("y")],
			[named("lo", 1), named("l", 2)]) == DuplicateBinding("longname")


def test_positional_skips_claimed_parameters():
	signature = [req("a"), req("b"), req("c")]
	assert bind(signature, [pos(1), named("b", 2), pos(3)]) == {"a": 1, "b": 2, "c": 3}


def test_defaults_fill_the_gaps():
	signature = [req("a"), opt("b", 10), opt("c", 20)]
	result = bind(signature, [pos(1), named("c", 3)])
	assert result == {"a": 1, "b": 10, "c": 3}
	assert list(result) == ["a", "b", "c"]


def test_positional_never_uses_prefixes():
	# An unlabelled argument is never matched by name, however it looks.
	assert bind([req("x"), req("y")], [pos("y"), pos("x")]) == {"x": "y", "y": "x"}


def test_bind_is_pure():
	signature = [req("longname_x"), opt("y", 0)]
	args = [named("l", 1)]
	first = bind(signature, args)
	first["y"] = "mutated"
	assert bind(signature, args) == {"longname_x": 1, "y": 0}
	assert args == [named("l", 1)]
	assert bind(signature, [named("q", 1)]) == bind(signature, [named("q", 1)])


def test_failure_messages():
	assert MissingArgument("x").message == "missing required argument: x"
	assert "xa, xb" in AmbiguousLabel("x", ("xa", "xb")).message
	assert TooManyArguments(3, 2).message == "too many arguments: got 3, expected at most 2"
	assert isinstance(DuplicateBinding("x"), BindingFailure)


def test_check_signature():
	assert check_signature([req("a"), opt("b", 1)]) == (req("a"), opt("b", 1))
	with pytest.raises(ValueError):
		check_signature([req("a"), req("a")])
	with pytest.raises(ValueError):
		check_signature([req("")])


def test_parameter_spec_is_frozen():
	p = req("x")
	with pytest.raises(Exception):
		p.name = "y"


def test_prefix_candidates_shrink_as_labels_bind():
	# :xa takes xab, which leaves xb as the only match for :x.
	assert bind([req("xab"), req("xb")], [named("xa", 1), named("x", 2)]) == {"xab": 1, "xb": 2}
	assert bind([req("xab"), req("xb"), req("y")],
			[named("xa", 1), named("x", 2), pos(3)]) == {"xab": 1, "xb": 2, "y": 3}
	# Taken in the other order, :x is still ambiguous.
	assert bind([req("xab"), req("xb")],
			[named("x", 2), named("xa", 1)]) == AmbiguousLabel("x", ("xab", "xb"))
