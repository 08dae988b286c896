r"""
Small helpers shared by the compiler, the descriptors and the table.

- Unset: marker for "no value given", distinct from None and from falsey values.
- coalesce(value, default): resolve Unset to a default.
- @rename(name): stable __name__/__qualname__ for generated functions.
- mirror(name): read-only property over self._name handing out frozen containers.
- unescape(text): drop the backslash of every "\x" pair of a specification.
- same(left, right, nocase): option name comparison.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> unescape(r"hello\ world")
    'hello world'
    >>> same("-Verbose", "-verbose", nocase=True)
    True
"""
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final, Union


@final
class UnsetType:
    """
    Type of the Unset marker.

    There is exactly one instance; it is falsey, prints as "Unset", cannot be
    subclassed and combines with classes into unions (str | Unset), so it can
    appear in isinstance() checks next to the types it stands in for.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    def __or__(self, other, /):
        return Union[UnsetType, other]

    def __ror__(self, other, /):
        return Union[other, UnsetType]

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


def coalesce(object, default=None, /):
    """
    object, or default when object is Unset (None, 0 and "" are kept).
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator that gives a generated function a readable name in reprs and tracebacks.
    """
    if not isinstance(name, str):
        raise TypeError("rename() expects a string")

    def decorate(function):
        if not callable(function):
            raise TypeError("rename() can only decorate callables")
        function.__name__ = function.__qualname__ = name
        return function

    return decorate


def _freeze(object):
    # immutable views keep descriptor state private
    match object:
        case str():
            return object
        case Sequence():
            return tuple(object)
        case Mapping():
            return MappingProxyType(object)
        case Set():
            return frozenset(object)
    return object


def mirror(name, /):
    """
    Read-only property exposing self._<name>; lists, dicts and sets come out
    as tuples, mapping proxies and frozensets.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() expects an attribute name")
    attribute = "_" + name

    @rename(name)
    def view(self):
        return _freeze(getattr(self, attribute))

    return property(view)


def unescape(text, /):
    r"""
    Remove escaping backslashes: "a\ b" gives "a b", "\\" gives "\".

    A lone backslash at the very end has nothing to escape and is kept.
    """
    if not isinstance(text, str):
        raise TypeError("unescape() expects a string")

    characters = iter(text)
    result = []
    for character in characters:
        if character == "\\":
            character = next(characters, "\\")
        result.append(character)
    return "".join(result)


def same(left, right, /, nocase=False):
    """
    Whether two option names are equal, ignoring case when nocase is set.
    """
    if nocase:
        return left.casefold() == right.casefold()
    return left == right


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "unescape",
    "same",
    "UnsetType",
    "Unset",
)
