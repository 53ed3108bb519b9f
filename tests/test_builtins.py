import warnings

from vex.interpreter import run
from vex.binder import AmbiguousLabel
from vex.errors import *
from vex.objects import *
import pytest


def vec(*elements):
	return Vector(elements)


def test_mean():
	with warnings.catch_warnings():
		warnings.simplefilter("error")
		assert run("(mean (c 1 2 3))") == vec(2)


def test_mean_of_one_value_warns():
	with pytest.warns(VexWarning, match="single value"):
		assert run("(mean 5)") == vec(5)


def test_mean_of_nothing_stops():
	with pytest.raises(StopError, match="empty"):
		run("(mean (c))")


def test_stop_and_warning_are_separate_channels():
	assert not issubclass(StopError, Warning)
	assert not issubclass(VexWarning, VexError)

	with pytest.warns(VexWarning, match="careful"):
		assert run('(warning "careful")') == String("careful")
	with pytest.raises(StopError, match="halt"):
		run('(stop "halt")')


def test_arithmetic_recycles():
	assert run("(+ (c 1 2 3 4) (c 10 20))") == vec(11, 22, 13, 24)
	assert run("(* 2 (c 1 2 3))") == vec(2, 4, 6)
	assert run("(- 5)") == vec(-5)
	assert run("(+ (c) 1)") == vec()
	with pytest.warns(VexWarning, match="multiple"):
		run("(+ (c 1 2 3) (c 1 2))")


def test_division_by_zero():
	assert run("(/ 1 4)") == vec(0.25)
	with pytest.raises(DivideByZeroError):
		run("(/ 1 0)")


def test_comparison():
	assert run("(> (c 1 5) 3)") == vec(False, True)
	assert run("(== 2 2)") == vec(True)


def test_condition_must_be_scalar():
	with pytest.raises(ValueError):
		run("(if (c TRUE FALSE) 1 2)")
	with pytest.raises(ValueError):
		run("(if (c) 1 2)")


def test_seq():
	assert run("(seq 1 5)") == vec(1, 2, 3, 4, 5)
	assert run("(seq 1 10 :by 3)") == vec(1, 4, 7, 10)
	assert run("(seq 5 1 :b -2)") == vec(5, 3, 1)
	with pytest.raises(ValueError):
		run("(seq 1 5 :by -1)")


def test_vectors():
	assert run("(c 1 (c 2 3) NULL 4)") == vec(1, 2, 3, 4)
	assert run("(sum (c 1 2) 3)") == vec(6)
	assert run("(length (c 1 2 3))") == vec(3)
	assert run("(length NULL)") == vec(0)
	assert run("(is.null NULL)") == vec(True)
	with pytest.raises(ValueError):
		run("(c :a 1)")
	with pytest.raises(TypeError):
		run('(sum "a")')


def test_for_assigns_loop_variable():
	source = """
	(<- total 0)
	(for i (seq 1 4) (<- total (+ total i)))
	(c total i)
	"""
	assert run(source) == vec(10, 4)


def test_runif():
	first = run("(do (set.seed 1) (runif 5 :min 2 :max 3))")
	second = run("(do (set.seed 1) (runif 5 :min 2 :max 3))")
	assert first == second
	assert len(first) == 5
	assert all(2 <= x <= 3 for x in first)

	with pytest.raises(ArgumentMismatchError) as e:
		run("(runif 1 :m 2)")
	assert e.value.failure == AmbiguousLabel("m", ("min", "max"))


def test_print(capsys):
	assert run("(print (c 1 2))") == vec(1, 2)
	assert capsys.readouterr().out == "c(1, 2)\n"


def test_quote():
	assert run("(quote x)") == Symbol("x")
	assert run("(quote (f 1))") == List([Symbol("f"), Vector.of(1)])


def test_scalar_arguments_must_have_length_one():
	with pytest.raises(ValueError, match="'from'"):
		run("(seq (c) 3)")
	with pytest.raises(ValueError, match="'by'"):
		run("(seq 1 3 :by (c 1 2))")
	with pytest.raises(ValueError, match="'n'"):
		run("(runif (c))")
	with pytest.raises(ValueError, match="'seed'"):
		run("(set.seed (c 1 2))")


def test_null_operand_is_an_empty_vector():
	assert run("(+ 1 NULL)") == vec()
	assert run("(- NULL)") == vec()
	assert run("(< NULL 1)") == vec()
	assert run("(- 3)") == vec(-3)


def test_vector_repr():
	assert repr(vec(1, 2)) == "c(1, 2)"
	assert repr(vec(2.5)) == "2.5"
	assert repr(vec(3.0)) == "3"
	assert repr(vec(True)) == "TRUE"
	assert repr(vec()) == "numeric(0)"
	assert repr(nil) == "NULL"
