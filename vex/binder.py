"""
Matching of call-site arguments to a function's declared parameters.

Arguments are matched in three passes, always in this order:
  1. labels equal to a parameter name,
  2. labels that are a unique prefix of a parameter name not taken by pass 1,
  3. unlabelled arguments, in order, to the parameters still open.
Whatever is left takes its default, or the call fails.

Failures are returned as BindingFailure values rather than raised;
it is up to the caller to turn them into errors of its own.
"""

from typing import Any, Optional
from pydantic.dataclasses import dataclass

from vex.debug import trace


@dataclass(frozen=True)
class ParameterSpec:
	name: str
	has_default: bool = False
	default_value: Any = None

	@classmethod
	def required(cls, name):
		return cls(name)

	@classmethod
	def optional(cls, name, default_value):
		return cls(name, True, default_value)


@dataclass(frozen=True)
class CallArgument:
	value: Any
	label: Optional[str] = None  # None for positional arguments


@dataclass(frozen=True)
class BindingFailure:
	@property
	def message(self) -> str:
		raise NotImplementedError

@dataclass(frozen=True)
class MissingArgument(BindingFailure):
	name: str
	@property
	def message(self):
		return f"missing required argument: {self.name}"

@dataclass(frozen=True)
class UnknownLabel(BindingFailure):
	label: str
	@property
	def message(self):
		return f"unknown argument label: {self.label!r}"

@dataclass(frozen=True)
class AmbiguousLabel(BindingFailure):
	label: str
	candidates: tuple[str, ...]
	@property
	def message(self):
		return (f"ambiguous partial match: {self.label!r} could be any of "
				+ ", ".join(self.candidates))

@dataclass(frozen=True)
class DuplicateBinding(BindingFailure):
	name: str
	@property
	def message(self):
		return f"parameter bound more than once: {self.name}"

@dataclass(frozen=True)
class TooManyArguments(BindingFailure):
	count: int
	expected: int
	@property
	def message(self):
		return f"too many arguments: got {self.count}, expected at most {self.expected}"


def check_signature(signature):
	"""
	Validates a signature at definition time.
	Raises ValueError on empty or repeated parameter names.
	"""
	signature = tuple(signature)
	seen = set()
	for p in signature:
		if not p.name:
			raise ValueError("Parameter names must not be empty.")
		if p.name in seen:
			raise ValueError(f"Parameter {p.name!r} is declared more than once.")
		seen.add(p.name)
	return signature


@trace
def bind(signature, args) -> dict[str, Any] | BindingFailure:
	bound = dict()
	labelled = [a for a in args if a.label is not None]
	positional = [a for a in args if a.label is None]

	names = {p.name for p in signature}
	inexact = []
	for arg in labelled:
		if arg.label not in names:
			inexact.append(arg)
		elif arg.label in bound:
			return DuplicateBinding(arg.label)
		else:
			bound[arg.label] = arg.value

	exact = set(bound)
	for arg in inexact:
		if arg.label == "":
			return UnknownLabel(arg.label)
		# Candidates are the parameters still unbound when this label is reached.
		candidates = tuple(p.name for p in signature
				if p.name not in bound and p.name.startswith(arg.label))
		match candidates:
			case ():
				# Taken by an earlier partial label is a duplicate, not a miss.
				taken = [p.name for p in signature
						if p.name not in exact and p.name.startswith(arg.label)]
				if len(taken) == 1:
					return DuplicateBinding(taken[0])
				return UnknownLabel(arg.label)
			case (name,):
				bound[name] = arg.value
			case _:
				return AmbiguousLabel(arg.label, candidates)

	slots = [p.name for p in signature if p.name not in bound]
	if len(positional) > len(slots):
		return TooManyArguments(len(positional), len(slots))
	for name, arg in zip(slots, positional):
		bound[name] = arg.value

	result = dict()
	for p in signature:
		if p.name in bound:
			result[p.name] = bound[p.name]
		elif p.has_default:
			result[p.name] = p.default_value
		else:
			return MissingArgument(p.name)
	return result
