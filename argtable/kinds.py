"""
Argument kinds and their per-kind behaviour.

Every descriptor carries exactly one Kind for its lifetime. What differs
between kinds (how many follow-on tokens an option consumes, how a token is
converted, how a default literal is read, which zero value accessors fall back
to) lives in a small dispatch table keyed by Kind instead of a class hierarchy.

Literals
- boolean: 1/0, true/false, yes/no, on/off (case-insensitive)
- integer: optional sign followed by decimal digits
- real:    optional sign, digits with an optional fraction, optional exponent
"""
import re
from collections import namedtuple
from enum import Enum, IntFlag

_BOOLEANS = {
    "1": True, "true": True, "yes": True, "on": True,
    "0": False, "false": False, "no": False, "off": False,
}
_INTEGER = re.compile(r"[+-]?[0-9]+")
_REAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class Kind(Enum):
    """
    closed set of argument kinds.

    the value doubles as the human label used in diagnostics and help.
    """
    BOOLEAN     = "boolean"
    INTEGER     = "integer"
    REAL        = "real"
    STRING      = "string"
    STRING_LIST = "string list"
    CHOICE      = "choice"

    @property
    def nargs(self):
        """number of follow-on tokens an unattached option of this kind consumes."""
        return _BEHAVIOURS[self].nargs

    @property
    def zero(self):
        """sentinel returned by accessors when a lookup fails for this kind."""
        zero = _BEHAVIOURS[self].zero
        return list(zero) if isinstance(zero, list) else zero

    @property
    def placeholder(self):
        """value placeholder shown by the usage renderer ('' for booleans)."""
        return _BEHAVIOURS[self].placeholder

    def convert(self, argument, text, /):
        """
        convert a token for argument; raises ValueError when the token is not acceptable.
        """
        return _BEHAVIOURS[self].convert(argument, text)

    def literal(self, text, /):
        """
        read a default literal from a specification string; raises ValueError.
        """
        return _BEHAVIOURS[self].literal(text)


class Flags(IntFlag):
    """
    option flags as spelled in the specification grammar.

    - NOCASE   ('n'): name is matched case-insensitively.
    - REQUIRED ('r'): the option must be given for a parse to succeed.
    - SKIP     ('s'): consumed tokens stay in the filtered token list.
    - MULTIPLE ('m'): a string option may repeat (values accumulate).
    """
    NONE     = 0
    NOCASE   = 1 << 0
    REQUIRED = 1 << 1
    SKIP     = 1 << 2
    MULTIPLE = 1 << 3


def to_boolean(text, /):
    try:
        return _BOOLEANS[text.strip().lower()]
    except KeyError:
        raise ValueError("invalid boolean literal %r" % text) from None


def to_integer(text, /):
    if not _INTEGER.fullmatch(text):
        raise ValueError("invalid integer literal %r" % text)
    return int(text)


def to_real(text, /):
    if not _REAL.fullmatch(text):
        raise ValueError("invalid real literal %r" % text)
    return float(text)


def _choice(argument, text):
    # list.index raises ValueError for unknown labels
    return list(argument.choices).index(text)


def _append(argument, text):
    return [*argument.value, text]


_Behaviour = namedtuple("_Behaviour", ("nargs", "convert", "literal", "zero", "placeholder"))

_BEHAVIOURS = {
    Kind.BOOLEAN: _Behaviour(
        nargs=0,
        convert=lambda argument, text: True,
        literal=to_boolean,
        zero=False,
        placeholder="",
    ),
    Kind.INTEGER: _Behaviour(
        nargs=1,
        convert=lambda argument, text: to_integer(text),
        literal=to_integer,
        zero=0,
        placeholder="<integer>",
    ),
    Kind.REAL: _Behaviour(
        nargs=1,
        convert=lambda argument, text: to_real(text),
        literal=to_real,
        zero=0.0,
        placeholder="<real>",
    ),
    Kind.STRING: _Behaviour(
        nargs=1,
        convert=lambda argument, text: text,
        literal=str,
        zero="",
        placeholder="<string>",
    ),
    Kind.STRING_LIST: _Behaviour(
        nargs=1,
        convert=_append,
        literal=str,
        zero=[],
        placeholder="<string>",
    ),
    Kind.CHOICE: _Behaviour(
        nargs=1,
        convert=_choice,
        literal=to_integer,
        zero=-1,
        placeholder="<choice>",
    ),
}


__all__ = (
    "Kind",
    "Flags",
    "to_boolean",
    "to_integer",
    "to_real",
)
