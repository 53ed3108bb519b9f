class _ValueMixin:
	def __init__(self, value, *args, **kws):
		self.value = value
		super().__init__(*args, **kws)

	def __hash__(self):
		return hash(self.value)

	def __eq__(self, other):
		return type(self) is type(other) and self.value == other.value

	def __repr__(self):
		return repr(self.value)

	def __str__(self):
		return str(self.value)


class LanguageObject:
	pass


class Form(LanguageObject):
	"""Anything the reader can produce. Comments are language objects but not forms."""


class Atom(_ValueMixin, Form):
	def __init__(self, value):
		super().__init__(value=value)


class _Nil(Atom):
	"""Special singleton NULL object."""
	def __init__(self):
		super().__init__(None)
	def __repr__(self):
		return "NULL"
	def __str__(self):
		return "NULL"
nil = _Nil()


def _format_scalar(x):
	if isinstance(x, bool):
		return "TRUE" if x else "FALSE"
	if isinstance(x, float) and x.is_integer():
		return str(int(x))
	return str(x)


class Vector(Atom):
	"""
	There are no scalar numbers: a number is a vector of length one.
	Elements are python bools, ints or floats and never change after construction.
	"""
	def __init__(self, elements=()):
		super().__init__(tuple(elements))

	@classmethod
	def of(cls, *elements):
		return cls(elements)

	def __len__(self):
		return len(self.value)

	def __iter__(self):
		return iter(self.value)

	def __getitem__(self, i):
		return self.value[i]

	def __repr__(self):
		match len(self.value):
			case 0:
				return "numeric(0)"
			case 1:
				return _format_scalar(self.value[0])
			case _:
				return "c(" + ", ".join(map(_format_scalar, self.value)) + ")"

	def __str__(self):
		return " ".join(map(_format_scalar, self.value))


def wrap_bool(b):
	return Vector.of(bool(b))


class Symbol(Atom):
	def __repr__(self):
		return self.value  # Don't want quotes around symbol names.


class Keyword(Atom):
	"""A call-site label, written :name, naming the argument that follows it."""
	def __repr__(self):
		return ":" + self.value


class String(Atom):
	_str_escape = str.maketrans({
		'"': '\\"',
		"\\": "\\\\"})
	def __repr__(self):
		return '"' + self.value.translate(self._str_escape) + '"'


class List(list, Form):
	def __init__(self, elements=None):
		list.__init__(self, [] if elements is None else elements)
		Form.__init__(self)
		self.elements = self  # to make this work with match statements
	def __repr__(self):
		return '(' + " ".join(map(repr, self)) + ')'
	def __str__(self):
		return '(' + " ".join(map(str, self)) + ')'
	def __hash__(self):
		# To allow usage as dict keys.
		return hash(tuple(self))

	@property
	def head(self):
		return self[0] if len(self) > 0 else nil

	@property
	def rest(self):
		return List(self[1:]) if len(self) > 0 else List()


class Comment(_ValueMixin, LanguageObject):
	def __init__(self, content):
		super().__init__(value=content)
	def __str__(self):
		return ";" + self.value + "\n"


class Execution(Form):
	"""
	Anything that can be called.
	The signature is a tuple of binder.ParameterSpec, fixed at definition time.
	Equality is identity.
	"""
	def __init__(self, signature, name=None):
		self.signature = tuple(signature)
		self.name = name

	def __repr__(self):
		return f"<function {self.name or 'anonymous'}>"


class Promise(LanguageObject):
	"""
	An unevaluated default argument expression.
	It is forced in the frame of the call that needed it,
	so it never escapes into user-visible values.
	"""
	def __init__(self, form):
		self.form = form
		self.forcing = False
	def __repr__(self):
		return f"<promise {self.form!r}>"


__all__ = [
	*(cls.__name__ for cls in [
		LanguageObject, Form,
		Atom, Vector, Symbol, Keyword, String, List, Comment,
		Execution, Promise]),
	"nil", "wrap_bool"]
