from contextlib import contextmanager

from vex.debug import debug
from vex.binder import BindingFailure, CallArgument, bind
import vex.errors as errors
import vex.execution as jexec
from vex.objects import *


class Stackframe:
	def __init__(self, last_frame, call_form, environment):
		self.last_frame = last_frame
		self.call_form = call_form
		self.environment = environment

	def __repr__(self):
		return f"<{self.call_form!r}>"


# One evaluation at a time: this is module state and not thread-safe.
top_frame = None


def iter_stack():
	"""Active call frames, outermost first."""
	frames = []
	f = top_frame
	while f is not None:
		frames.append(f)
		f = f.last_frame
	return reversed(frames)


@contextmanager
def push_new_frame(call_form, environment):
	debug(f"PUSH: {call_form!r}")
	global top_frame
	top_frame = Stackframe(top_frame, call_form, environment)
	try:
		yield top_frame
	finally:
		top_frame = top_frame.last_frame
		debug(f"POP: {call_form!r}")


def force(name, promise, frame):
	"""Evaluates a default argument in its call frame and replaces it with the value."""
	if promise.forcing:
		raise errors.ValueError(f"Default of '{name}' depends on itself.", promise.form)
	promise.forcing = True
	try:
		value = evaluate(promise.form, frame)
	finally:
		promise.forcing = False
	return frame.define(name, value)


def evaluate(obj, env):
	match obj:
		case Symbol(value=name):
			value = env.lookup(name)
			if isinstance(value, Promise):
				value = force(name, value, env.frame_of(name))
			return value

		case Keyword():
			raise errors.SyntaxError(f"Label {obj!r} is not inside a call.", obj)

		# Other atoms are self-evaluating objects.
		case Atom() | Execution():
			return obj

		case List():
			if len(obj) == 0:
				return nil
			return invoke(obj, env)

		case _:
			raise errors.TypeError(f"Cannot evaluate {obj!r}.", obj)


def split_arguments(forms):
	"""Pairs each :label with the form that follows it."""
	args = []
	forms = iter(forms)
	for form in forms:
		if not isinstance(form, Keyword):
			args.append(CallArgument(form))
			continue
		value = next(forms, None)
		if value is None:
			raise errors.SyntaxError(f"Label {form!r} is not followed by an argument.", form)
		args.append(CallArgument(value, form.value))
	return args


def invoke(form, env):
	with push_new_frame(form, env):
		target = evaluate(form.head, env)
		if not isinstance(target, Execution):
			raise errors.TypeError("Invocation target is not a function.", form)

		args = split_arguments(form.rest)
		if isinstance(target, jexec.EvaluateIn):
			args = [CallArgument(evaluate(a.value, env), a.label) for a in args]

		if isinstance(target, jexec.Variadic):
			matched = args
		else:
			matched = bind(target.signature, args)
			if isinstance(matched, BindingFailure):
				raise errors.ArgumentMismatchError(matched, form)

		try:
			return target.invoke(env, matched)
		except (errors.VexError, errors.ReturnSignal):
			raise
		except Exception as e:
			# Take the first one that isn't empty.
			raise errors.VexError(str(e) or repr(e) or str(type(e)), form) from e
