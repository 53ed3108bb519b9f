from vex import reader
from vex.builtins import builtin_symbols
from vex.environment import Environment
import vex.errors as errors
from vex.evaluator import evaluate
from vex.objects import nil


def init_environment():
	"""
	A fresh global frame.
	Its parent holds the builtins, so user definitions shadow them
	without ever replacing them for other environments.
	"""
	return Environment(builtin_symbols).new_child()


def evaluate_forms(forms, env):
	result = nil
	for form in forms:
		try:
			result = evaluate(form, env)
		except errors.ReturnSignal:
			raise errors.VexError("No function to return from.", form) from None
	return result


def run(source, env=None):
	"""
	Reads and evaluates every form in source, returning the last value.
	Raises reader.ParseError on malformed text and errors.VexError on failure.
	"""
	if env is None:
		env = init_environment()
	return evaluate_forms(reader.read_all(source), env)
