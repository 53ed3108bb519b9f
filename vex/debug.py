import os
from functools import wraps
from sys import stderr

# Tracing is opt-in: set VEX_DEBUG to any non-empty value.
# Checked once at import, so decorated functions pay nothing when off.
enabled = __debug__ and bool(os.environ.get("VEX_DEBUG"))

_depth = 0


def debug(*args, **kws):
	if not enabled:
		return
	kws.setdefault("file", stderr)
	print("[DEBUG]" + "  " * _depth, *args, **kws)


def _format_call(fn, args, kws):
	parts = [*map(repr, args), *(f"{k}={v!r}" for k, v in kws.items())]
	return f"{fn.__name__}({', '.join(parts)})"


def trace(fn):
	"""Logs each call to fn and its result, indented by nesting depth."""
	if not enabled:
		return fn

	@wraps(fn)
	def traced(*args, **kws):
		global _depth
		call = _format_call(fn, args, kws)
		debug(f"CALL: {call}")
		_depth += 1
		try:
			result = fn(*args, **kws)
		finally:
			_depth -= 1
		debug(f"RETN: {call} -> {result!r}")
		return result
	return traced
