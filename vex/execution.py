import vex.objects as objects
import vex.errors as errors
import vex.evaluator as evaluator
from vex.binder import check_signature


class EvaluateIn:
	"""Arguments are evaluated in the caller's frame before the call."""
	def __init__(self, *args, **kws):
		super().__init__(*args, **kws)

class Variadic:
	"""
	Skips argument binding altogether.
	invoke receives the list of CallArgument as supplied at the call site.
	"""
	def __init__(self, *args, **kws):
		super().__init__(*args, **kws)


class Function(EvaluateIn, objects.Execution):
	def invoke(self, caller_env, arguments):
		# arguments: parameter name to value, in declaration order.
		raise NotImplementedError

class SpecialForm(objects.Execution):
	def invoke(self, caller_env, arguments):
		# Same as Function, except the values are unevaluated forms.
		raise NotImplementedError

class Primitive(Variadic, EvaluateIn, objects.Execution):
	def __init__(self, name=None):
		super().__init__((), name)

	def invoke(self, caller_env, arguments):
		raise NotImplementedError


class Closure(Function):
	"""A user defined function, closed over the frame it was defined in."""

	def __init__(self, signature, body, environment, name=None):
		try:
			signature = check_signature(signature)
		except ValueError as e:
			raise errors.SyntaxError(str(e)) from None
		super().__init__(signature, name)
		self.body = body
		self.environment = environment

	def invoke(self, caller_env, arguments):
		frame = self.environment.new_child()
		# Every parameter is in the frame before any default is evaluated.
		# Defaults get a fresh promise per call, forced on first lookup,
		# so they may refer to parameters declared after them.
		for name, value in arguments.items():
			if isinstance(value, objects.Promise):
				value = objects.Promise(value.form)
			frame.define(name, value)

		try:
			for name in arguments:
				value = frame.bindings[name]
				if isinstance(value, objects.Promise):
					evaluator.force(name, value, frame)
			return evaluator.evaluate(self.body, frame)
		except errors.ReturnSignal as r:
			return r.value
