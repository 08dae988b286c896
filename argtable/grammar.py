r"""
Argtable specification compiler.

A specification is a whitespace separated list of option entries:

    entry     := '-'+ NAME (':' typespec)? ('=' default)? WS? ('(' descr ')'?)?
    typespec  := TYPE [ '[' choices ']' ] [ COUNT ] FLAG*
    NAME      := alnum (alnum | '_')*
    TYPE      := 'f' | 'i' | 'I' | 'r' | 'R' | 's' | 'S' | 'c' | 'C'
    FLAG      := 'n' | 'r' | 's' | 'm'

Types
- f: boolean flag (no value, never attached)
- i/I: integer, r/R: real, s/S: string, c/C: choice
  (uppercase letters take their value attached to the name: -I3)

Choices are listed inside brackets, separated by spaces or commas; the value of
a choice option is the index of the matching label. COUNT must be a positive
integer and only 1 is supported, except for strings flagged 'm' which
accumulate every occurrence into a list.

Flags
- n: case-insensitive name, r: required, s: skip (keep consumed tokens in the
  filtered list), m: may repeat (strings only)

Defaults run up to the next whitespace and descriptions up to the closing
parenthesis; in both a backslash makes the next character literal.

Example:
    >>> [argument.name for argument in compile("-v:f -n:i=3 (count) -m:C[a,b]r")]
    ['-v', '-n', '-m']
"""
import re
import string

from .arguments import Argument
from .faults import *
from .kinds import Kind, Flags
from .utils import *

_TYPES = {
    "f": (Kind.BOOLEAN, False),
    "i": (Kind.INTEGER, False),
    "I": (Kind.INTEGER, True),
    "r": (Kind.REAL, False),
    "R": (Kind.REAL, True),
    "s": (Kind.STRING, False),
    "S": (Kind.STRING, True),
    "c": (Kind.CHOICE, False),
    "C": (Kind.CHOICE, True),
}

_FLAGS = {
    "n": Flags.NOCASE,
    "r": Flags.REQUIRED,
    "s": Flags.SKIP,
    "m": Flags.MULTIPLE,
}


class _Cursor:
    """
    read position over a specification string.

    peek() returns "" past the end so the grammar can compare characters
    without bounds checks.
    """

    def __init__(self, format):
        self.format = format
        self.index = 0

    @property
    def done(self):
        return self.index >= len(self.format)

    def peek(self):
        return self.format[self.index] if self.index < len(self.format) else ""

    def advance(self, count=1):
        self.index = min(self.index + count, len(self.format))

    def skip(self):
        while not self.done and self.peek().isspace():
            self.advance()

    def fail(self, exception, message, /, *, code, title, hint):
        raise exception(
            message,
            code=code,
            title=title,
            hint=hint,
            format=self.format,
            column=self.index + 1,
        )

    def invalid(self):
        if self.done:
            self.fail(
                InvalidCharacterError,
                "unexpected end of specification at column %d" % (self.index + 1),
                code=FaultCode.INVALID_CHARACTER,
                title="invalid character",
                hint="complete the last entry (for example: -name:i)",
            )
        self.fail(
            InvalidCharacterError,
            "invalid character %r at column %d" % (self.peek(), self.index + 1),
            code=FaultCode.INVALID_CHARACTER,
            title="invalid character",
            hint="entries look like -name[:type[count][flags]][=default] [(description)]",
        )


def _alnum(char):
    return char.isascii() and char.isalnum()


def _name(cursor):
    """
    '-'+ alnum (alnum | '_')*
    """
    start = cursor.index
    if cursor.peek() != "-":
        cursor.invalid()
    while cursor.peek() == "-":
        cursor.advance()
    if not _alnum(cursor.peek()):
        cursor.invalid()
    while _alnum(cursor.peek()) or cursor.peek() == "_":
        cursor.advance()
    return cursor.format[start:cursor.index]


def _choices(cursor):
    """
    '[' label ([ ,]+ label)* ']'
    """
    if cursor.peek() != "[":
        cursor.fail(
            MissingChoicesError,
            "missing choices for choice option at column %d" % (cursor.index + 1),
            code=FaultCode.MISSING_CHOICES,
            title="missing choices",
            hint="list the labels in brackets after the type (for example: -mode:c[fast,slow])",
        )
    cursor.advance()

    start = cursor.index
    while not cursor.done and cursor.peek() != "]":
        cursor.advance()
    if cursor.done:
        cursor.fail(
            MissingChoicesError,
            "unterminated choices starting at column %d" % start,
            code=FaultCode.UNTERMINATED_CHOICES,
            title="unterminated choices",
            hint="close the choice list with ']'",
        )

    labels = [label for label in re.split(r"[ ,]+", cursor.format[start:cursor.index]) if label]
    cursor.advance()
    return tuple(labels)


def _count(cursor):
    """
    optional decimal count; returns 1 when absent.
    """
    start = cursor.index
    while cursor.peek() and cursor.peek() in string.digits:
        cursor.advance()
    if start == cursor.index:
        return 1

    if (count := int(digits := cursor.format[start:cursor.index])) <= 0:
        cursor.index = start
        cursor.fail(
            InvalidCountError,
            "invalid value for count %r at column %d" % (digits, start + 1),
            code=FaultCode.INVALID_COUNT,
            title="invalid count",
            hint="counts must be positive integers",
        )
    return count


def _typespec(cursor):
    """
    TYPE [choices] [COUNT] FLAG*  →  (kind, attached, choices, count, flags)
    """
    if (letter := cursor.peek()) not in _TYPES:
        cursor.invalid()
    kind, attached = _TYPES[letter]
    cursor.advance()

    choices = _choices(cursor) if kind is Kind.CHOICE else ()
    count = _count(cursor)

    flags = Flags.NONE
    while cursor.peek() in _FLAGS:
        flags |= _FLAGS[cursor.peek()]
        cursor.advance()

    return kind, attached, choices, count, flags


def _escaped(cursor, stop):
    """
    read up to (not including) the first unescaped character satisfying stop.
    """
    start = cursor.index
    while not cursor.done and not stop(cursor.peek()):
        if cursor.peek() == "\\":
            cursor.advance()
        cursor.advance()
    return unescape(cursor.format[start:cursor.index])


def _description(cursor):
    """
    optional '(' text ')' after optional whitespace; returns Unset when absent.
    """
    probe = cursor.index
    while probe < len(cursor.format) and cursor.format[probe].isspace():
        probe += 1
    if probe >= len(cursor.format) or cursor.format[probe] != "(":
        return Unset

    cursor.index = probe + 1
    descr = _escaped(cursor, lambda char: char == ")")
    if cursor.peek() == ")":
        cursor.advance()
    return descr


def _entry(cursor):
    """
    compile one entry into an Argument.
    """
    column = cursor.index + 1
    name = _name(cursor)

    kind, attached, choices, count, flags = Kind.BOOLEAN, False, (), 1, Flags.NONE
    if cursor.peek() == ":":
        cursor.advance()
        kind, attached, choices, count, flags = _typespec(cursor)

    text = Unset
    if cursor.peek() == "=":
        cursor.advance()
        text = _escaped(cursor, str.isspace)

    descr = _description(cursor)

    if not cursor.done and not cursor.peek().isspace():
        cursor.invalid()

    if kind is Kind.STRING and Flags.MULTIPLE in flags:
        kind, count = Kind.STRING_LIST, 1
    elif count != 1:
        raise MultipleValuesError(
            "multiple values not supported for option %r at column %d" % (name, column),
            code=FaultCode.MULTIPLE_VALUES,
            title="multiple values",
            hint="remove the count (only one value per option is supported)",
            format=cursor.format,
            column=column,
        )

    default = Unset
    if text:
        try:
            default = kind.literal(text)
        except ValueError:
            label = Kind.INTEGER.value if kind is Kind.CHOICE else kind.value
            raise InvalidDefaultError(
                "invalid %s default %r for option %r at column %d" % (label, text, name, column),
                code=FaultCode.INVALID_DEFAULT,
                title="invalid default",
                hint="write a %s literal after '='" % label,
                format=cursor.format,
                column=column,
            ) from None

    return Argument(
        name,
        kind,
        attached=attached,
        count=count,
        flags=flags,
        choices=choices,
        default=default,
        descr=descr,
    )


def compile(format, /):
    """
    Compile a specification string into a list of Argument descriptors.

    Parameters
    - format: str
      The specification (see module documentation for the grammar).

    Returns
    - list[Argument] in declaration order (duplicated names are kept).

    Raises
    - SpecificationError (a ValueError) describing the first problem found;
      nothing is returned on failure.
    """
    if not isinstance(format, str):
        raise TypeError("compile() argument must be a string")

    cursor = _Cursor(format)
    arguments = []
    while True:
        cursor.skip()
        if cursor.done:
            break
        arguments.append(_entry(cursor))
    return arguments


__all__ = (
    "compile",
)
