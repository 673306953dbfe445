"""
arglet positional candidates.

A positional candidate is one non-option token that is either a genuine
positional argument or the value of the flag right before it. The classifier
cannot tell the two apart on its own, so every candidate remembers that flag
as its tentative owner. Once the caller confirms the owner takes a value, the
classifier drops every candidate it owns.

Semantics
- value: str, the token exactly as it appeared in the argument vector.
- owner: str | None, the flag that immediately preceded the token (None when
  no flag was awaiting a value: first token, after '--', after '-', after a
  self-contained '--name=value').
- Immutable and hashable; equality compares (value, owner).
"""
from .utils import mirror


class Positional:
    """
    One positional candidate (see module docstring).

    Example
        >>> Positional("output.txt", "-o")
        positional(value='output.txt', owner='-o')
    """
    __slots__ = ("_value", "_owner")

    value = mirror("value")
    owner = mirror("owner")

    def __init__(self, value, /, owner=None):
        if not isinstance(value, str):
            raise TypeError("Positional() 'value' must be a string")
        if owner is not None and not isinstance(owner, str):
            raise TypeError("Positional() 'owner' must be a string or None")
        self._value = value
        self._owner = owner

    def owned(self):
        """return whether a flag may claim this candidate as its value."""
        return self._owner is not None

    def __eq__(self, other):
        if not isinstance(other, Positional):
            return NotImplemented
        return (self._value, self._owner) == (other._value, other._owner)

    def __hash__(self):
        return hash((type(self), self._value, self._owner))

    def __repr__(self):
        return "positional(%s)" % ", ".join("%s=%r" % pair for pair in (
            ("value", self._value),
            ("owner", self._owner),
        ))

    def __rich_repr__(self):
        yield "value", self._value
        # rich omits the field while it equals the default (None)
        yield "owner", self._owner, None


__all__ = (
    "Positional",
)
