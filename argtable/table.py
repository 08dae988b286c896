r"""
Argtable argument table: compiled descriptors, the token engine and accessors.

Overview
- ArgumentTable(format, ...) compiles a specification string (see
  argtable.grammar) into an ordered list of Argument descriptors.
- parse(tokens, *slots) walks a sys.argv-shaped token sequence, binds values
  to the descriptors, filters the tokens it consumed, checks required options
  and optionally binds the results to typed slots.
- Typed accessors (get_integer, is_choice_set, ...) read the results by name
  or by position.

Token rules
- token 0 (the program name) is always kept.
- tokens that do not start with '-' pass through untouched, as does every
  token after a literal '--' (which is itself dropped).
- '--help' renders the usage summary on stderr and raises the help flag.
- an option token selects the first descriptor whose name matches it, exactly
  or as an attached prefix (-I3); failing that, a token made of letters can
  select a cluster of single-letter boolean flags (-abc).
- consumed tokens are dropped from the filtered output unless the option
  carries the skip flag.

Diagnostics
- every fault of a pass is recorded on table.faults and surfaced at the end of
  the pass: printed on the stderr console in shell mode, otherwise warnings go
  through the warnings module and errors are raised together as ArgumentsExit.

Quick example:
    >>> table = ArgumentTable("-v:f (verbose) -n:i=1 (runs) -m:c[fast,slow]")
    >>> tokens = ["prog", "-v", "-n", "3", "input.txt", "-m", "slow"]
    >>> table.parse(tokens)
    True
    >>> tokens
    ['prog', 'input.txt']
    >>> table.get_boolean("-v"), table.get_integer("-n"), table.get_choice("-m")
    (True, 3, 1)
"""
import copy
import functools
import os
from collections.abc import Sequence, MutableSequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .faults import *
from .grammar import compile
from .kinds import Kind
from .slots import Slot
from .usage import render
from .utils import *


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with the proper English suffix.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _sanitize_options(options, /):
    """
    Internal: validate the runtime options of a table.
    """
    for name in ("shell", "fancy", "colorful"):
        if not isinstance(options[name], bool):
            raise TypeError(f"argument-table {name!r} must be a boolean")

    if not isinstance(prog := options["prog"], str | Unset):
        raise TypeError("argument-table 'prog' must be a string")
    elif prog is not Unset and not prog:
        raise ValueError("argument-table 'prog' cannot be empty")


class ArgumentTable:
    """
    Ordered table of compiled argument descriptors plus the matching engine.

    Parameters
    - format: str, specification string compiled on construction.
    - prog: str, program name used in diagnostics and usage (defaults to the
      basename of token 0 of the parsed sequence).
    - shell: bool, print faults (True) or raise/warn through Python (False).
    - fancy: bool, render faults and usage inside panels.
    - colorful: bool, apply the rich palette.

    Sequence protocol
    - len(table), iteration in declaration order, table[position] and
      table[name] (first declared match, KeyError when unknown).
    """

    def __init__(self, format="", /, *, prog=Unset, shell=True, fancy=False, colorful=True):
        _sanitize_options(options := {
            "prog": prog,
            "shell": shell,
            "fancy": fancy,
            "colorful": colorful,
        })
        for name, object in options.items():
            setattr(self, "_" + name, object)

        self._faults = []
        self._remaining = ()
        self._help = False
        self._passthrough = False
        self._deferred = False
        self._program = coalesce(prog, "argtable")
        self.format = format

    # --- configuration -----------------------------------------------------

    @property
    def format(self):
        """
        The specification string; assigning a new one recompiles the table.
        """
        return self._format

    @format.setter
    def format(self, format):
        arguments = compile(format)
        self._format = format
        self._arguments = arguments
        self._faults.clear()

        for index, argument in enumerate(arguments):
            for earlier in arguments[:index]:
                if earlier.named(argument.name) or argument.named(earlier.name):
                    self.trigger(DuplicateArgumentWarning(
                        "duplicated argument %r, lookups resolve to the first declaration" % argument.name,
                        title="duplicated argument",
                        code=FaultCode.DUPLICATE_ARGUMENT,
                        hint="rename or remove the later declaration of %r" % argument.name,
                        argument=argument,
                    ))
                    break

    prog = mirror("prog")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    @property
    def arguments(self):
        return tuple(self._arguments)

    @property
    def faults(self):
        """
        Faults recorded by the last pass (or by the last standalone check).
        """
        return tuple(self._faults)

    @property
    def remaining(self):
        """
        Filtered token sequence produced by the last pass.
        """
        return self._remaining

    @property
    def help(self):
        """
        Whether '--help' was seen during the last pass.
        """
        return self._help

    # --- sequence protocol -------------------------------------------------

    def __len__(self):
        return len(self._arguments)

    def __iter__(self):
        return iter(self._arguments)

    def __getitem__(self, key):
        if isinstance(key, str):
            if (argument := self.lookup(key)) is None:
                raise KeyError(key)
            return argument
        if isinstance(key, int) and not isinstance(key, bool):
            return self._arguments[key]
        raise TypeError("argument-table indices must be integers or strings")

    def lookup(self, name, /):
        """
        Return the first descriptor designated by name, or None.
        """
        for argument in self._arguments:
            if argument.named(name):
                return argument
        return None

    def _resolve(self, key):
        if isinstance(key, str):
            return self.lookup(key)
        if isinstance(key, int) and not isinstance(key, bool):
            return self._arguments[key] if 0 <= key < len(self._arguments) else None
        raise TypeError("argument keys must be names or positions")

    # --- faults ------------------------------------------------------------

    def trigger(self, fault, /, **options):
        """
        Record a fault and surface it with the table's runtime options.

        During a pass the fault is only recorded; the pass surfaces every
        recorded fault once it is over (see _finalize).
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        self._faults.append(fault := copy.replace(
            fault,
            **options,
            prog=self._program,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        ))
        if not self._deferred:
            trigger(fault)

    def _finalize(self):
        """
        surface the faults recorded by a pass.

        - shell mode: every fault is printed in order of occurrence.
        - otherwise: warnings are issued through the warnings module and the
          errors, if any, are raised together as an ArgumentsExit.
        """
        exceptions = []
        for fault in self._faults:
            if isinstance(fault, ArgumentsException) and not self._shell:
                exceptions.append(fault)
            elif isinstance(fault, ArgumentsException | ArgumentsWarning):
                trigger(fault)
            else:
                raise RuntimeError("unexpected fault")

        if exceptions:
            trigger(
                ArgumentsExit(exceptions),
                prog=self._program,
                shell=self._shell,
                fancy=self._fancy,
                colorful=self._colorful,
            )

    # --- engine ------------------------------------------------------------

    def parse(self, tokens, /, *slots, update=Unset):
        """
        Match a token sequence against the table.

        Parameters
        - tokens: sequence of str, program name first.
          A mutable sequence (list) is filtered in place; an immutable one
          (tuple) is only read.
        - *slots: Slot objects to bind after the pass (see bind()).
        - update: bool, force (True) or disable (False) in-place filtering.

        Returns
        - bool: False when a value was missing or a required option is unset.

        Notes
        - the filtered sequence is also kept on table.remaining.
        - when shell=False, errors are raised together as ArgumentsExit and
          slots are left untouched.
        """
        if isinstance(tokens, str) or not isinstance(tokens, Sequence):
            raise TypeError("parse() argument must be a sequence of strings")
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a sequence of strings")
        if not isinstance(update, bool | Unset):
            raise TypeError("parse() 'update' must be a boolean")

        mutable = isinstance(tokens, MutableSequence)
        if update is True and not mutable:
            raise TypeError("parse() cannot update an immutable sequence")
        update = coalesce(update, mutable)

        self._faults.clear()
        self._help = False
        self._program = coalesce(self._prog, os.path.basename(tokens[0]) if tokens and tokens[0] else "argtable")

        self._deferred = True
        try:
            remaining, complete = self._scan(list(tokens))
            if update:
                tokens.clear()
                tokens.extend(remaining)
            self._remaining = tuple(remaining)
            success = self.check_required() and complete
        finally:
            self._deferred = False

        self._finalize()

        if slots:
            self.bind(*slots)

        return success

    def _scan(self, tokens):
        """
        Internal: one pass over tokens; returns (filtered tokens, complete).

        complete is False when the pass stopped on a missing value.
        """
        self._passthrough = False
        if not tokens:
            return [], True

        output = [tokens[0]]
        index = 1
        while index < len(tokens):
            token = tokens[index]

            if self._passthrough or not token.startswith("-"):
                output.append(token)
                index += 1
                continue

            if token == "--":
                self._passthrough = True
                index += 1
                continue

            if token == "--help":
                self._help = True
                self.usage()
                index += 1
                continue

            if (argument := self._match(token)) is None:
                output.extend(self._cluster(token, index))
                index += 1
                continue

            nargs = argument.nargs
            if index + nargs >= len(tokens):
                self.trigger(MissingValueError(
                    "missing value for %r at %s position" % (token, _ordinal(index)),
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    hint="give %r a %s value" % (argument.name, argument.kind.value),
                    token=token,
                    index=index,
                    argument=argument,
                ))
                output.extend(tokens[index:])
                return output, False

            values = tokens[index + 1:index + 1 + nargs]
            if not argument.assign(token, values):
                value = values[0] if values else token[len(argument.name):]
                if argument.kind is Kind.CHOICE:
                    hint = "choose one of %s" % ", ".join(map(repr, argument.choices))
                else:
                    hint = "%r expects a %s value" % (argument.name, argument.kind.value)
                self.trigger(InvalidValueWarning(
                    "invalid value %r for %r at %s position" % (value, argument.name, _ordinal(index)),
                    title="invalid value",
                    code=FaultCode.INVALID_VALUE,
                    hint=hint,
                    token=token,
                    index=index,
                    argument=argument,
                ))
                output.extend(tokens[index:index + 1 + nargs])
            elif argument.skip:
                output.extend(tokens[index:index + 1 + nargs])

            index += 1 + nargs

        return output, True

    def _match(self, token):
        """
        Internal: first descriptor whose name matches token (exact or attached).
        """
        for argument in self._arguments:
            if argument.matches(token):
                return argument
        return None

    def _letters(self):
        return [
            argument for argument in self._arguments
            if argument.kind is Kind.BOOLEAN and len(argument.name) == 2
        ]

    def _unrecognised(self, token, index, name=Unset):
        if name is Unset:
            message = "unrecognised argument %r at %s position" % (token, _ordinal(index))
        else:
            message = "unrecognised argument %r in %r at %s position" % (name, token, _ordinal(index))
        self.trigger(UnrecognisedArgumentWarning(
            message,
            title="unrecognised argument",
            code=FaultCode.UNRECOGNISED_ARGUMENT,
            hint="try '%s --help' to see the available options" % self._program,
            token=token,
            index=index,
        ))

    def _cluster(self, token, index):
        """
        Internal: resolve token as a cluster of single-letter boolean flags.

        Returns the tokens to keep in the filtered output: the token itself
        when it is not a valid cluster, otherwise one '-x' token per
        skip-flagged letter.
        """
        letters = self._letters()
        if not letters or not token[1:].isalnum() or not token[1:].isascii():
            self._unrecognised(token, index)
            return [token]

        resolved = []
        for letter in token[1:]:
            for argument in letters:
                if argument.named("-" + letter):
                    resolved.append(argument)
                    break
            else:
                self._unrecognised(token, index, "-" + letter)
                return [token]

        output = []
        for letter, argument in zip(token[1:], resolved):
            argument.assign("-" + letter)
            if argument.skip:
                output.append("-" + letter)
        return output

    # --- results -----------------------------------------------------------

    def check_required(self):
        """
        Report every required option that is not set; True when none is missing.
        """
        complete = True
        for argument in self._arguments:
            if argument.required and not argument.isset:
                complete = False
                self.trigger(RequiredArgumentError(
                    "required argument %r not supplied" % argument.name,
                    title="required argument",
                    code=FaultCode.REQUIRED_ARGUMENT,
                    hint="add %r to the command line" % argument.name,
                    argument=argument,
                ))
        return complete

    def reset(self):
        """
        Clear the 'set' state of every descriptor (values are kept).
        """
        for argument in self._arguments:
            argument.isset = False

    def get(self, key, kind, /):
        """
        Value of the descriptor designated by key (name or position).

        When no descriptor matches, or its kind differs from kind, the fault
        is reported and the kind's zero value is returned (shell mode), or
        raised (shell=False).
        """
        if not isinstance(kind, Kind):
            raise TypeError("get() 'kind' must be a Kind")

        if (argument := self._resolve(key)) is None:
            self.trigger(UnknownArgumentError(
                "unknown argument %r" % (key,),
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                hint="use a declared option name or a position below %d" % len(self._arguments),
                key=key,
            ))
            return kind.zero

        if argument.kind is not kind:
            self.trigger(KindMismatchError(
                "argument %r holds %s values, not %s values" % (argument.name, argument.kind.value, kind.value),
                title="kind mismatch",
                code=FaultCode.KIND_MISMATCH,
                hint="read %r with the %s accessor" % (argument.name, argument.kind.value),
                key=key,
                argument=argument,
            ))
            return kind.zero

        return list(argument.value) if kind is Kind.STRING_LIST else argument.value

    def get_boolean(self, key, /):
        return self.get(key, Kind.BOOLEAN)

    def get_integer(self, key, /):
        return self.get(key, Kind.INTEGER)

    def get_real(self, key, /):
        return self.get(key, Kind.REAL)

    def get_string(self, key, /):
        return self.get(key, Kind.STRING)

    def get_string_list(self, key, /):
        """
        Copy of the values collected by a repeatable string option.
        """
        return self.get(key, Kind.STRING_LIST)

    def get_choice(self, key, /):
        """
        Index of the selected label (or the default index).
        """
        return self.get(key, Kind.CHOICE)

    def _is(self, key, kind, set=False):
        try:
            argument = self._resolve(key)
        except TypeError:
            return False
        return argument is not None and argument.kind is kind and (argument.isset or not set)

    def is_boolean(self, key, /):
        return self._is(key, Kind.BOOLEAN)

    def is_integer(self, key, /):
        return self._is(key, Kind.INTEGER)

    def is_real(self, key, /):
        return self._is(key, Kind.REAL)

    def is_string(self, key, /):
        return self._is(key, Kind.STRING)

    def is_string_list(self, key, /):
        return self._is(key, Kind.STRING_LIST)

    def is_choice(self, key, /):
        return self._is(key, Kind.CHOICE)

    def is_boolean_set(self, key, /):
        return self._is(key, Kind.BOOLEAN, set=True)

    def is_integer_set(self, key, /):
        return self._is(key, Kind.INTEGER, set=True)

    def is_real_set(self, key, /):
        return self._is(key, Kind.REAL, set=True)

    def is_string_set(self, key, /):
        return self._is(key, Kind.STRING, set=True)

    def is_string_list_set(self, key, /):
        return self._is(key, Kind.STRING_LIST, set=True)

    def is_choice_set(self, key, /):
        return self._is(key, Kind.CHOICE, set=True)

    def bind(self, *slots):
        """
        Copy current values into typed slots, one per non-skip descriptor.

        Slots are matched to descriptors in declaration order; skip-flagged
        descriptors take no slot. Nothing is written unless every slot fits.

        Raises
        - BindingError: wrong number of slots, a None slot, or a slot whose
          kind differs from its descriptor.
        - TypeError: an object that is not a Slot.
        """
        targets = [argument for argument in self._arguments if not argument.skip]

        if len(slots) != len(targets):
            raise BindingError(
                "expected %d slots, got %d" % (len(targets), len(slots)),
                title="invalid binding",
                code=FaultCode.INVALID_BINDING,
                hint="pass one slot per option that is not flagged 's'",
            )

        for position, (slot, argument) in enumerate(zip(slots, targets), 1):
            if slot is None:
                raise BindingError(
                    "missing slot for %r at %s position" % (argument.name, _ordinal(position)),
                    title="invalid binding",
                    code=FaultCode.INVALID_BINDING,
                    hint="pass Slot(Kind.%s) for %r" % (argument.kind.name, argument.name),
                    argument=argument,
                )
            if not isinstance(slot, Slot):
                raise TypeError("bind() arguments must be slots")
            if slot.kind is not argument.kind:
                raise BindingError(
                    "%s slot at %s position cannot hold %s argument %r" % (
                        slot.kind.value, _ordinal(position), argument.kind.value, argument.name
                    ),
                    title="invalid binding",
                    code=FaultCode.INVALID_BINDING,
                    hint="pass Slot(Kind.%s) for %r" % (argument.kind.name, argument.name),
                    argument=argument,
                )

        for slot, argument in zip(slots, targets):
            slot.value = list(argument.value) if argument.kind is Kind.STRING_LIST else argument.value

    # --- helpers for programs scanning the remaining tokens ----------------

    def check_option(self, token, /):
        """
        Classify a remaining token for programs that scan positionals themselves.

        Returns
        - "" for '--' (every later token is then treated as positional),
        - the option text without its leading '-' for an option token,
        - None for a positional token.
        """
        if token == "--":
            self._passthrough = True
            return ""
        if self._passthrough or not token.startswith("-"):
            return None
        return token[1:]

    def unhandled_option(self, option, /):
        """
        Report an option (as returned by check_option) the program did not handle.
        """
        if not option:
            return
        self.trigger(UnhandledOptionWarning(
            "unhandled option %r" % ("-" + option),
            title="unhandled option",
            code=FaultCode.UNHANDLED_OPTION,
            hint="try '%s --help' to see the available options" % self._program,
            option=option,
        ))

    # --- rendering ---------------------------------------------------------

    def usage(self, prog=Unset, /, *, console=Unset):
        """
        Print the usage summary (defaults to the stderr console).
        """
        render(self, coalesce(prog, self._program), console=console)

    def dump(self, *, console=Unset):
        """
        Print every descriptor with its current state as a rich table.
        """
        console = coalesce(console, Console())
        table = Table(title=Text(self._format) if self._format else None, title_justify="left")
        for column in ("name", "kind", "flags", "attached", "value", "set", "default", "choices", "description"):
            table.add_column(column)
        for argument in self._arguments:
            table.add_row(*map(Text, (
                argument.name,
                argument.kind.value,
                "|".join(flag.name.lower() for flag in argument.flags) or "-",
                "yes" if argument.attached else "no",
                repr(argument.value),
                "yes" if argument.isset else "no",
                repr(argument.default),
                ", ".join(argument.choices),
                argument.descr or "",
            )))
        console.print(table)

    def __repr__(self):
        return "argument-table(%s)" % ", ".join("%s=%r" % field for field in self.__rich_repr__())

    def __rich_repr__(self):
        yield "format", self._format
        yield "arguments", self.arguments
        yield "shell", self._shell
        yield "fancy", self._fancy
        yield "colorful", self._colorful


__all__ = (
    "ArgumentTable",
)
