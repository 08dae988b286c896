r"""
Argtable argument descriptors.

Overview
- Argument: the compiled definition of one option (name, kind, attachment,
  flags, choices, default, description) plus its run-time state (value, isset).
  One concrete class serves every kind; kind-specific behaviour is looked up in
  the Kind dispatch table (argtable.kinds).

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
    the definition fields as read-only properties declared in __introspectable__.

Definition (sanitized on construction, immutable afterwards)
- name: r"-+[A-Za-z0-9][A-Za-z0-9_]*"
- kind: Kind
- attached: bool (never for BOOLEAN)
- count: int, only 1 is supported
- flags: Flags (NOCASE | REQUIRED | SKIP | MULTIPLE)
- choices: tuple[str, ...], only for CHOICE (repeated labels allowed)
- default: kind-typed; Unset materializes the kind's natural zero
  (False, 0, 0.0, "", "" for string lists, 0 for choices)
- descr: str | None

Run-time state (mutated only by the argument table)
- value: current kind-typed value (a list for STRING_LIST, starting empty)
- isset: True once a token was successfully bound

Quick example:
    >>> argument = Argument("-i", Kind.INTEGER, default=3)
    >>> argument.matches("-i"), argument.nargs
    (True, 1)
    >>> argument.assign("-i", ["42"]), argument.value, argument.isset
    (True, 42, True)
"""
import functools
import operator
import re

from .kinds import Kind, Flags
from .utils import *

_DEFAULTS = {
    Kind.BOOLEAN: False,
    Kind.INTEGER: 0,
    Kind.REAL: 0.0,
    Kind.STRING: "",
    Kind.STRING_LIST: "",
    Kind.CHOICE: 0,
}

_TYPES = {
    Kind.BOOLEAN: bool,
    Kind.INTEGER: int,
    Kind.REAL: int | float,
    Kind.STRING: str,
    Kind.STRING_LIST: str,
    Kind.CHOICE: int,
}


class ArgumentType(type):
    """
    Metaclass that turns descriptors into introspectable objects.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field.
    - Provide stable, readable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name and used in messages.
    - __displayable__ (if set) narrows which attributes __rich_repr__ shows.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the identity of a descriptor (name, kind, attachment, count).

    Raises
    - TypeError: wrong field types.
    - ValueError: malformed name, attached boolean, unsupported count.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(r"-+[A-Za-z0-9][A-Za-z0-9_]*", name):
        raise ValueError(f"{cls.__typename__} 'name' must be dashes followed by an alphanumeric word, got {name!r}")

    if not isinstance(kind := metadata["kind"], Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a Kind")

    if kind is Kind.BOOLEAN and metadata["attached"]:
        raise ValueError(f"boolean {cls.__typename__} cannot be attached")

    if not isinstance(count := metadata["count"], int) or isinstance(count, bool):
        raise TypeError(f"{cls.__typename__} 'count' must be an integer")
    elif count < 1:
        raise ValueError(f"{cls.__typename__} 'count' must be a positive integer")
    elif count != 1:
        raise ValueError(f"{cls.__typename__} multiple values are not supported")

    metadata["flags"] = Flags(metadata["flags"])


def _sanitize_value_metadata(cls, metadata, /):
    """
    Internal: validate choices, default and description against the kind.

    - choices are only legal for CHOICE descriptors; labels must be
      non-empty strings. They are normalized to a tuple; a repeated label
      resolves to its first index.
    - default: Unset becomes the kind's natural zero; otherwise it must have
      the kind's Python type. A choice default is any integer
      index; it is not range-checked against the labels.
    - descr: Unset becomes None; otherwise a string (empty allowed).
    """
    kind = metadata["kind"]

    choices = []
    for choice in metadata["choices"]:
        if not isinstance(choice, str) or not choice:
            raise TypeError(f"{cls.__typename__} 'choices' must be non-empty strings")
        choices.append(choice)
    if choices and kind is not Kind.CHOICE:
        raise ValueError(f"{kind.value} {cls.__typename__} cannot have 'choices'")
    metadata["choices"] = tuple(choices)

    default = coalesce(metadata["default"], _DEFAULTS[kind])
    if not isinstance(default, _TYPES[kind]) or (isinstance(default, bool) and kind is not Kind.BOOLEAN):
        raise TypeError(f"{kind.value} {cls.__typename__} 'default' must be {_TYPES[kind]!r}")
    if kind is Kind.REAL:
        default = float(default)
    metadata["default"] = default

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = coalesce(descr)


class Argument(metaclass=ArgumentType):
    """
    Compiled definition and run-time state of one command-line option.

    Matching rules
    - unattached: the token must equal the name (case-insensitively with NOCASE).
    - attached: the token must be longer than the name and start with it; the
      remainder of the token is the value.

    Properties
    - The names listed in __introspectable__ are read-only views over the
      sanitized definition; value and isset are plain run-time attributes.
    """

    __introspectable__ = (
        "name",
        "kind",
        "attached",
        "count",
        "flags",
        "choices",
        "default",
        "descr",
    )

    __displayable__ = (
        "name",
        "kind",
        "flags",
        "attached",
        "value",
        "default",
        "choices",
    )

    def __init__(
            self,
            name,
            kind=Kind.BOOLEAN,
            /,
            attached=False,
            count=1,
            flags=Flags.NONE,
            choices=(),
            default=Unset,
            descr=Unset,
    ):
        metadata = {
            "name": name,
            "kind": kind,
            "attached": bool(attached),
            "count": count,
            "flags": flags,
            "choices": choices,
            "default": default,
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_value_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self.value = [] if self.kind is Kind.STRING_LIST else self.default
        self.isset = False

    @property
    def nocase(self):
        return Flags.NOCASE in self._flags

    @property
    def required(self):
        return Flags.REQUIRED in self._flags

    @property
    def skip(self):
        return Flags.SKIP in self._flags

    @property
    def multiple(self):
        return Flags.MULTIPLE in self._flags

    @property
    def nargs(self):
        """
        Number of follow-on tokens this option consumes (0 when attached).
        """
        return 0 if self._attached else self._kind.nargs

    def matches(self, token, /):
        """
        Whether a command-line token selects this option.
        """
        if not self._attached:
            return same(token, self._name, self.nocase)
        if len(token) <= len(self._name):
            return False
        return same(token[:len(self._name)], self._name, self.nocase)

    def named(self, name, /):
        """
        Whether name designates this option (used by accessors).
        """
        return same(name, self._name, self.nocase)

    def assign(self, token, values=(), /):
        """
        Bind the value carried by token (attached) or values (unattached).

        Returns True on success and marks the option as set. On a conversion
        failure the current value and isset are left untouched and False is
        returned.
        """
        if self._kind is Kind.BOOLEAN:
            text = None
        elif self._attached:
            text = token[len(self._name):]
        else:
            text, = values

        try:
            value = self._kind.convert(self, text)
        except ValueError:
            return False

        self.value = value
        self.isset = True
        return True


__all__ = (
    "Argument",
)

# Remove the internal metaclass from the module namespace; it is not part of the public API.
del ArgumentType
