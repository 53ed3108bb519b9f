class VexError(Exception):
	def __init__(self, msg, offending_form=None):
		super().__init__(msg)
		# Imported here, the evaluator itself depends on this module.
		from vex.evaluator import iter_stack
		self.stackframes = list(iter_stack())
		self.msg = msg
		if offending_form is None and len(self.stackframes) != 0:
			offending_form = self.stackframes[-1].call_form
		self.offending_form = offending_form

	def __str__(self):
		return self.msg

class UndefinedVariableError(VexError):
	def __init__(self, name, msg=None):
		from vex.objects import Symbol
		super().__init__(msg or f"object '{name}' not found", Symbol(name))
		self.name = name

class ArgumentMismatchError(VexError):
	"""Carries the binder's failure value; the message comes from it."""
	def __init__(self, failure, offending_form=None):
		super().__init__(failure.message, offending_form)
		self.failure = failure

class StopError(VexError):
	def __init__(self, msg, offending_form=None):
		super().__init__(msg, offending_form)

class SyntaxError(VexError): pass
class ValueError(VexError): pass
class TypeError(VexError): pass

class DivideByZeroError(VexError):
	def __init__(self, msg="Cannot divide by zero.", offending_form=None):
		super().__init__(msg, offending_form)


class ReturnSignal(Exception):
	"""
	Not an error: unwinds to the innermost closure call,
	which returns the carried value.
	"""
	def __init__(self, value):
		super().__init__()
		self.value = value


class VexWarning(UserWarning):
	"""Advisory channel. Never raised as an error by the runtime itself."""


def format_error(e):
	result = "Traceback:\n"
	for i, f in enumerate(e.stackframes):
		result += f"  {i}: {f.call_form!r}\n"

	result += (
			f"Offending form: {e.offending_form!r}\n"
			f"Cause: {e.msg}")

	return result
