from string import whitespace, digits, ascii_letters
from functools import wraps
from dataclasses import dataclass
from typing import Any

from vex.objects import *


_SPACES = set(whitespace)
_DIGITS = set(digits)
_LETTERS = set(ascii_letters)
_PUNCTS = set(r'!#$%&*+-./<=>?@\^_~')
_SEPARATORS = set("()[]") | _SPACES | {""}
_IDENT_CHARS = _LETTERS | _PUNCTS | _DIGITS


class ParseError(Exception):
	def __init__(self, msg, line):
		super().__init__()
		self.msg = msg
		self.line = line
	def __str__(self):
		return f"Parse error on line {self.line}: {self.msg}"


@dataclass
class ParseResult:
	success: bool
	result: Any = None
	chars_consumed_adj: int = None


def _component_parser(parse_method):
	"""
	Rewinds the reader when a component fails to parse,
	or applies the manual adjustment the component asked for.
	"""
	@wraps(parse_method)
	def component_parser_wrapper(self):
		bookmark = self._next_char
		out = parse_method(self)
		if out.chars_consumed_adj is not None:
			self._next_char += out.chars_consumed_adj
		elif not out.success:
			self._next_char = bookmark
		return out
	return component_parser_wrapper


class Reader:
	"""
	Reads forms from a character source.

	The source is a function returning one character per call,
	and the empty string once the input is exhausted (it must not raise on EOF).
	Characters are buffered so that any component can backtrack.
	"""

	def __init__(self, get_next_char):
		self._get_next_char = get_next_char
		self._buffer = []
		self._next_char = 0
		self.line = 1
		self.chars = self._char_gen()

	def _char_gen(self):
		while True:
			while self._next_char >= len(self._buffer):
				c = self._get_next_char()
				if c == '\n':
					self.line += 1
				self._buffer.append(c)

			out = self._buffer[self._next_char]
			self._next_char += 1
			yield out

	def _next(self):
		return next(self.chars)

	def _error(self, msg):
		return ParseError(msg, self.line)

	@_component_parser
	def _at_eof(self):
		return ParseResult(self._next() == "")

	@_component_parser
	def _at_close(self):
		return ParseResult(self._next() == ")")

	def read(self):
		"""The next form, or None at end of input."""
		self.skip_whitespace()
		if self._at_eof().success:
			return None
		return self.parse_form().result

	@_component_parser
	def skip_whitespace(self):
		while self._next() in _SPACES:
			pass
		return ParseResult(True, chars_consumed_adj=-1)

	@_component_parser
	def parse_form(self):
		order = [
			self.parse_comment,
			self.parse_list,
			self.parse_string,
			self.parse_keyword,
			self.parse_number,
			self.parse_symbol]

		self.skip_whitespace()
		for parse_function in order:
			out = parse_function()
			if out.success:
				# adjustment already applied by wrapper
				return ParseResult(True, out.result)

		raise self._error("Invalid form.")

	@_component_parser
	def parse_list(self):
		if self._next() != '(':
			return ParseResult(False)
		forms = []
		while True:
			self.skip_whitespace()
			if self._at_close().success:
				break
			if self._at_eof().success:
				raise self._error("Unterminated list.")
			form = self.parse_form().result
			if not isinstance(form, Comment):
				forms.append(form)
		return ParseResult(True, List(forms))

	@_component_parser
	def parse_comment(self):
		if self._next() != ';':
			return ParseResult(False)
		msg = []
		for c in self.chars:
			if c == '\n' or c == "":
				break
			msg.append(c)
		return ParseResult(True, Comment("".join(msg)))

	def _read_digits(self, into):
		"""Appends digits to into; returns the first non-digit character."""
		for c in self.chars:
			if c not in _DIGITS:
				return c
			into.append(c)

	@_component_parser
	def parse_number(self):
		num_str = []
		c = self._next()
		if c == '+' or c == '-':
			num_str.append(c)
			c = self._next()

		if c not in _DIGITS:
			return ParseResult(False)
		num_str.append(c)

		c = self._read_digits(num_str)
		is_decimal = c == '.'
		if is_decimal:
			num_str.append(c)
			c = self._read_digits(num_str)

		# Only accept as a number if we ended on a separator
		# (i.e., not in the middle of a weird identifier).
		if c not in _SEPARATORS:
			return ParseResult(False)
		text = "".join(num_str)
		value = float(text) if is_decimal else int(text)
		return ParseResult(True, Vector.of(value), -1)

	@_component_parser
	def parse_string(self):
		if self._next() != '"':
			return ParseResult(False)

		s = []
		for c in self.chars:
			if c == '"':
				break
			if c == '\\':  # escape
				c = self._next()
			if c == "":
				raise self._error("Unterminated string literal.")
			s.append(c)
		return ParseResult(True, String("".join(s)))

	def _read_identifier(self):
		s = []
		for c in self.chars:
			if c not in _IDENT_CHARS:
				break
			s.append(c)
		return "".join(s)

	@_component_parser
	def parse_keyword(self):
		if self._next() != ':':
			return ParseResult(False)
		label = self._read_identifier()
		if label == "":
			raise self._error("A label needs a name after ':'.")
		return ParseResult(True, Keyword(label), -1)

	@_component_parser
	def parse_symbol(self):
		name = self._read_identifier()
		if name != "":
			return ParseResult(True, Symbol(name), -1)
		return ParseResult(False)


def load_forms(get_next_char):
	reader = Reader(get_next_char)
	while True:
		form = reader.read()
		if form is None:
			break
		if isinstance(form, Comment):
			continue
		yield form


def read_all(text):
	chars = iter(text)
	return list(load_forms(lambda: next(chars, "")))
