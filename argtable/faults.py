"""
Argtable faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue,
  grouped by domain (specification, parsing, access, binding, warnings).
- ArgumentsException / ArgumentsWarning: base types that carry a message plus
  options and know how to render themselves as a short diagnostic line.
- ArgumentsExit: exception group raised at the end of a parse pass when the
  table runs outside shell mode and the pass produced errors.
- trigger(): central entry point to surface any fault.

Rendering
- compact (default): one line per fault
      [ prog — 20101 | Unrecognised Argument ] unrecognised argument '-x' at first position
- fancy: a rich Panel holding the message and the hint.
- colorful toggles the palette; hosts may override palette entries through a
  __styles__ mapping and code labels through a __codes__ mapping in __main__.

Integration
- The argument table calls trigger(fault, **ctx). In shell mode faults are
  printed on the stderr console; otherwise exceptions are raised and warnings
  go through the warnings module.
- Specification errors and binding errors are programming mistakes: they are
  always raised, never rendered.
"""
import copy
import os
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

# warnings are attributed to the first frame outside this package
_PACKAGE = os.path.dirname(os.path.abspath(__file__)) + os.sep

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping
    - specification (101xx)
      • INVALID_CHARACTER, MISSING_CHOICES, UNTERMINATED_CHOICES, INVALID_COUNT,
        MULTIPLE_VALUES, INVALID_DEFAULT
    - parsing (111xx)
      • MISSING_VALUE, REQUIRED_ARGUMENT
    - access (112xx)
      • UNKNOWN_ARGUMENT, KIND_MISMATCH
    - binding (113xx)
      • INVALID_BINDING
    - warnings (201xx / 202xx)
      • UNRECOGNISED_ARGUMENT, INVALID_VALUE, UNHANDLED_OPTION, DUPLICATE_ARGUMENT
    """
    # --- specification errors (101xx) ---
    INVALID_CHARACTER     = 10101
    MISSING_CHOICES       = 10102
    UNTERMINATED_CHOICES  = 10103
    INVALID_COUNT         = 10104
    MULTIPLE_VALUES       = 10105
    INVALID_DEFAULT       = 10106

    # --- parsing errors (111xx) ---
    MISSING_VALUE         = 11101
    REQUIRED_ARGUMENT     = 11102

    # --- access errors (112xx) ---
    UNKNOWN_ARGUMENT      = 11201
    KIND_MISMATCH         = 11202

    # --- binding errors (113xx) ---
    INVALID_BINDING       = 11301

    # --- warnings (20xxx) ---
    UNRECOGNISED_ARGUMENT = 20101
    INVALID_VALUE         = 20102
    UNHANDLED_OPTION      = 20103
    DUPLICATE_ARGUMENT    = 20201

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title_style, message_style):
    """
    shared rich rendering for exceptions and warnings.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    header = Text.assemble(
        "[ ",
        text(fault.options.get("prog", "argtable"), styler("prog-name")),
        " — ",
        text(fault.options["code"].normalize(), styler("code")),
        " | ",
        text(fault.options["title"].title(), styler(title_style)),
        " ]"
    )
    message = text(fault.message, styler(message_style))

    if fault.options.get("fancy", False):
        body = [message]
        if hint := fault.options.get("hint"):
            body.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        return Panel(Group(*body), title=header, title_align="left")

    return Text.assemble(header, " ", message)


class ArgumentsException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error-title", "error-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class SpecificationError(ArgumentsException, ValueError): ...
class InvalidCharacterError(SpecificationError): ...
class MissingChoicesError(SpecificationError): ...
class InvalidCountError(SpecificationError): ...
class MultipleValuesError(SpecificationError): ...
class InvalidDefaultError(SpecificationError): ...

class MissingValueError(ArgumentsException): ...
class RequiredArgumentError(ArgumentsException): ...
class UnknownArgumentError(ArgumentsException): ...
class KindMismatchError(ArgumentsException): ...
class BindingError(ArgumentsException): ...


class ArgumentsWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning-title", "warning-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, skip_file_prefixes=(_PACKAGE,))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognisedArgumentWarning(ArgumentsWarning): ...
class InvalidValueWarning(ArgumentsWarning): ...
class UnhandledOptionWarning(ArgumentsWarning): ...
class DuplicateArgumentWarning(ArgumentsWarning): ...


class ArgumentsExit(ExceptionGroup[ArgumentsException]):
    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad parse", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("bad parse", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        return Group(*self.exceptions)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, and any context a
      reporter may want to keep (token, index, argument, ...).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "ArgumentsException",
    "SpecificationError",
    "InvalidCharacterError",
    "MissingChoicesError",
    "InvalidCountError",
    "MultipleValuesError",
    "InvalidDefaultError",
    "MissingValueError",
    "RequiredArgumentError",
    "UnknownArgumentError",
    "KindMismatchError",
    "BindingError",
    "ArgumentsWarning",
    "UnrecognisedArgumentWarning",
    "InvalidValueWarning",
    "UnhandledOptionWarning",
    "DuplicateArgumentWarning",
    "ArgumentsExit",
    "FaultCode",
    "trigger",
)
