from functools import reduce
import operator as ops
import random
import warnings

from vex.objects import *
import vex.errors as errors
import vex.execution as jexec
from vex.execution import Closure
from vex.evaluator import evaluate
from vex.binder import ParameterSpec


builtin_symbols = {
	"NULL": nil,
	"TRUE": wrap_bool(True),
	"FALSE": wrap_bool(False),
}

def builtin_symbol(name):
	def reg_symbol(cls):
		builtin_symbols[name] = cls(name)
		return cls
	return reg_symbol


# Seeded through set.seed; shared by everything in the process.
_random = random.Random()


def _parameter(p):
	match p:
		case str(name):
			return ParameterSpec.required(name)
		case (str(name), default):
			return ParameterSpec.optional(name, default)
		case _:
			raise ValueError(f"Invalid builtin parameter: {p!r}")


def function_execution(*params):
	"""
	Decorates a python function to be an execution.Function class.
	Each param is a name, or a (name, default) pair for an optional one.
	The python function receives the bound values positionally,
	in declaration order, so parameter names need not be python identifiers.
	"""
	signature = tuple(map(_parameter, params))
	def decorator(fn):
		def __init__(self, name=None):
			jexec.Function.__init__(self, signature, name)
		def invoke(self, caller_env, arguments):
			return fn(*arguments.values())
		# Creates a class of the same name, with Function as parent.
		return type(fn.__name__, (jexec.Function,),
				{ '__init__': __init__, 'invoke': invoke })
	return decorator


def primitive_execution(fn):
	"""Like function_execution, for primitives taking any number of unlabelled values."""
	def invoke(self, caller_env, arguments):
		labelled = [a.label for a in arguments if a.label is not None]
		if labelled:
			raise errors.ValueError(
					f"{self.name} does not take labelled arguments: {', '.join(labelled)}")
		return fn(*(a.value for a in arguments))
	return type(fn.__name__, (jexec.Primitive,), { 'invoke': invoke })


def _numbers(v) -> Vector:
	if not isinstance(v, Vector):
		raise errors.TypeError(f"Value {v!r} is not a vector.", v)
	return v


def _operand(v) -> Vector:
	# NULL takes part in arithmetic as an empty vector.
	if v is nil:
		return Vector()
	return _numbers(v)


def _scalar(v, name):
	v = _numbers(v)
	if len(v) != 1:
		raise errors.ValueError(f"Argument '{name}' must have length one.", v)
	return v[0]


# Default of an omitted second operand; distinct from an explicit NULL.
_NO_OPERAND = object()


def _condition(v) -> bool:
	v = _numbers(v)
	if len(v) == 0:
		raise errors.ValueError("Condition has length zero.")
	if len(v) > 1:
		raise errors.ValueError("Condition has length greater than one.")
	return bool(v[0])


def _message(v) -> str:
	if isinstance(v, String):
		return v.value
	return str(v)


def _elementwise(op, e1, e2):
	a, b = _operand(e1), _operand(e2)
	if len(a) == 0 or len(b) == 0:
		return Vector()
	n = max(len(a), len(b))
	if n % len(a) != 0 or n % len(b) != 0:
		warnings.warn(
				"Longer object length is not a multiple of shorter object length.",
				errors.VexWarning)
	# The shorter operand is recycled.
	return Vector(op(a[i % len(a)], b[i % len(b)]) for i in range(n))


def _divide(x, y):
	if y == 0:
		raise errors.DivideByZeroError()
	return x / y


# Special forms.

@builtin_symbol("function")
class Lambda(jexec.SpecialForm):
	def __init__(self, name=None):
		super().__init__([ParameterSpec("params"), ParameterSpec("body")], name)

	@staticmethod
	def prepare_signature(params):
		if not isinstance(params, List):
			raise errors.SyntaxError("Parameter list must be a list.", params)
		signature = []
		for p in params:
			match p:
				case Symbol(value=name):
					signature.append(ParameterSpec.required(name))
				case List(elements=[Symbol(value=name), default]):
					# Evaluated at call time, in the callee's frame.
					signature.append(ParameterSpec.optional(name, Promise(default)))
				case _:
					raise errors.SyntaxError("The parameter specification is invalid.", p)
		return signature

	def invoke(self, caller_env, arguments):
		return Closure(
				self.prepare_signature(arguments["params"]),
				arguments["body"],
				caller_env)


@builtin_symbol("<-")
class Assignment(jexec.SpecialForm):
	def __init__(self, name=None):
		super().__init__([ParameterSpec("name"), ParameterSpec("value")], name)

	def invoke(self, caller_env, arguments):
		match arguments["name"]:
			case Symbol(value=name):
				pass
			case target:
				raise errors.SyntaxError("Assignment target is not an identifier.", target)
		value = evaluate(arguments["value"], caller_env)
		if isinstance(value, Closure) and value.name is None:
			value.name = name
		return caller_env.define(name, value)


@builtin_symbol("if")
class Conditional(jexec.SpecialForm):
	def __init__(self, name=None):
		super().__init__([
				ParameterSpec("test"),
				ParameterSpec("yes"),
				ParameterSpec.optional("no", nil)], name)

	def invoke(self, caller_env, arguments):
		if _condition(evaluate(arguments["test"], caller_env)):
			return evaluate(arguments["yes"], caller_env)
		return evaluate(arguments["no"], caller_env)


@builtin_symbol("for")
class ForLoop(jexec.SpecialForm):
	def __init__(self, name=None):
		super().__init__([
				ParameterSpec("var"),
				ParameterSpec("seq"),
				ParameterSpec("body")], name)

	def invoke(self, caller_env, arguments):
		var = arguments["var"]
		if not isinstance(var, Symbol):
			raise errors.SyntaxError("Loop variable is not an identifier.", var)
		for x in _numbers(evaluate(arguments["seq"], caller_env)):
			caller_env.define(var.value, Vector.of(x))
			evaluate(arguments["body"], caller_env)
		return nil


@builtin_symbol("while")
class WhileLoop(jexec.SpecialForm):
	def __init__(self, name=None):
		super().__init__([ParameterSpec("test"), ParameterSpec("body")], name)

	def invoke(self, caller_env, arguments):
		while _condition(evaluate(arguments["test"], caller_env)):
			evaluate(arguments["body"], caller_env)
		return nil


@builtin_symbol("quote")
class Quote(jexec.SpecialForm):
	def __init__(self, name=None):
		super().__init__([ParameterSpec("expr")], name)

	def invoke(self, caller_env, arguments):
		return arguments["expr"]


@builtin_symbol("do")
class Progn(jexec.Variadic, jexec.SpecialForm):
	def __init__(self, name=None):
		super().__init__((), name)

	def invoke(self, caller_env, arguments):
		result = nil
		for arg in arguments:
			if arg.label is not None:
				raise errors.SyntaxError("A block does not take labelled forms.", arg.value)
			result = evaluate(arg.value, caller_env)
		return result


# Control flow and signalling.

@builtin_symbol("return")
@function_execution(("value", nil))
def Return(value):
	raise errors.ReturnSignal(value)


@builtin_symbol("stop")
@function_execution(("message", String("")))
def Stop(message):
	raise errors.StopError(_message(message))


@builtin_symbol("warning")
@function_execution("message")
def SignalWarning(message):
	message = _message(message)
	warnings.warn(message, errors.VexWarning)
	return String(message)


@builtin_symbol("print")
@function_execution("x")
def Print(x):
	print(repr(x), flush=True)
	return x


# Arithmetic and comparison, elementwise.

def _arithmetic(op, unary):
	@function_execution("e1", ("e2", _NO_OPERAND))
	def Arithmetic(e1, e2):
		if e2 is _NO_OPERAND:
			return Vector(map(unary, _operand(e1)))
		return _elementwise(op, e1, e2)
	return Arithmetic

def _unary_only_for(name):
	def unary(x):
		raise errors.ValueError(f"{name} requires two arguments.")
	return unary

builtin_symbol("+")(_arithmetic(ops.add, ops.pos))
builtin_symbol("-")(_arithmetic(ops.sub, ops.neg))
builtin_symbol("*")(_arithmetic(ops.mul, _unary_only_for("*")))
builtin_symbol("/")(_arithmetic(_divide, _unary_only_for("/")))


def _comparison(op):
	@function_execution("e1", "e2")
	def Comparison(e1, e2):
		return _elementwise(op, e1, e2)
	return Comparison

builtin_symbol("==")(_comparison(ops.eq))
builtin_symbol("!=")(_comparison(ops.ne))
builtin_symbol("<")(_comparison(ops.lt))
builtin_symbol(">")(_comparison(ops.gt))
builtin_symbol("<=")(_comparison(ops.le))
builtin_symbol(">=")(_comparison(ops.ge))


# Vectors.

@builtin_symbol("c")
@primitive_execution
def Combine(*values):
	elements = []
	for v in values:
		if v is nil:
			continue
		elements.extend(_numbers(v))
	return Vector(elements)


@builtin_symbol("sum")
@primitive_execution
def Sum(*values):
	return Vector.of(reduce(ops.add, (x for v in values for x in _numbers(v)), 0))


@builtin_symbol("length")
@function_execution("x")
def Length(x):
	if x is nil:
		return Vector.of(0)
	return Vector.of(len(_numbers(x)))


@builtin_symbol("seq")
@function_execution("from", "to", ("by", Vector.of(1)))
def Sequence(start, end, by):
	start, end, by = (_scalar(v, name) for v, name in ((start, "from"), (end, "to"), (by, "by")))
	if by == 0:
		raise errors.ValueError("Step of a sequence cannot be zero.")
	if (end - start) * by < 0:
		raise errors.ValueError("Wrong sign in the step of a sequence.")
	elements = []
	x = start
	while (x <= end) if by > 0 else (x >= end):
		elements.append(x)
		x += by
	return Vector(elements)


@builtin_symbol("mean")
@function_execution("x")
def Mean(x):
	values = _numbers(x)
	if len(values) == 0:
		raise errors.StopError("Cannot take the mean of an empty vector.")
	if len(values) == 1:
		# Degraded but valid: carry on, and say so.
		warnings.warn("Mean of a single value is the value itself.", errors.VexWarning)
	return Vector.of(sum(values) / len(values))


@builtin_symbol("is.null")
@function_execution("x")
def IsNull(x):
	return wrap_bool(x is nil)


@builtin_symbol("runif")
@function_execution("n", ("min", Vector.of(0)), ("max", Vector.of(1)))
def RandomUniform(n, low, high):
	n, low, high = (_scalar(v, name) for v, name in ((n, "n"), (low, "min"), (high, "max")))
	return Vector(_random.uniform(low, high) for _ in range(int(n)))


@builtin_symbol("set.seed")
@function_execution("seed")
def SetSeed(seed):
	_random.seed(int(_scalar(seed, "seed")))
	return nil
