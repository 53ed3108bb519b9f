import vex.errors as errors


class Environment:
	"""
	One frame of the lexical environment chain.

	A frame maps names to values and points at the frame it was created in.
	The bindings are mutable, the parent link is not:
	a closure sees later changes made to its defining frames,
	but lookup only ever walks outward and never into a caller's frame.
	"""

	def __init__(self, bindings=None, parent=None):
		self.bindings = dict() if bindings is None else dict(bindings)
		self._parent = parent

	@property
	def parent(self):
		return self._parent

	def frame_of(self, name):
		"""The nearest frame defining name, or None."""
		env = self
		while env is not None:
			if name in env.bindings:
				return env
			env = env._parent
		return None

	def is_defined(self, name):
		return self.frame_of(name) is not None

	def lookup(self, name):
		frame = self.frame_of(name)
		if frame is None:
			raise errors.UndefinedVariableError(name)
		return frame.bindings[name]

	def define(self, name, value):
		self.bindings[name] = value
		return value

	def new_child(self, bindings=None):
		return Environment(bindings, parent=self)

	def __getitem__(self, name):
		return self.lookup(name)

	def __setitem__(self, name, value):
		self.define(name, value)

	def __contains__(self, name):
		return self.is_defined(name)

	def __repr__(self):
		depth = 0
		env = self._parent
		while env is not None:
			depth += 1
			env = env._parent
		return f"<Environment depth={depth} names={sorted(self.bindings)}>"
