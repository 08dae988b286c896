"""
Typed output slots for positional binding.

ArgumentTable.bind(*slots) writes the current value of every non-skip option,
in table order, into the slot at the same position. A slot declares the kind
it accepts, so a mismatch between the caller's outputs and the specification
is reported at the offending position instead of silently writing a value of
the wrong type.

Example:
    >>> verbose, count = Slot(Kind.BOOLEAN), Slot(Kind.INTEGER)
    >>> table = ArgumentTable("-v:f -n:i=3")
    >>> table.parse(["prog", "-v"], verbose, count)
    True
    >>> verbose.value, count.value
    (True, 3)
"""
from .kinds import Kind


class Slot:
    """
    A mutable, kind-checked output cell.

    value starts at the kind's zero (False, 0, 0.0, "", [], -1) until bound.
    """
    __slots__ = ("_kind", "value")

    def __init__(self, kind, /):
        if not isinstance(kind, Kind):
            raise TypeError("slot 'kind' must be a Kind")
        self._kind = kind
        self.value = kind.zero

    @property
    def kind(self):
        return self._kind

    def __repr__(self):
        return "slot(kind=%r, value=%r)" % (self._kind, self.value)

    def __rich_repr__(self):
        yield "kind", self._kind
        yield "value", self.value


__all__ = (
    "Slot",
)
