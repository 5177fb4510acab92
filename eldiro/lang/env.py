"""Binding environment for eldiro sessions."""

from eldiro.lang.error import UnboundName


class Env:
    """Mutable mapping of binding names to Values. Storing a name that already exists overwrites it: there is no
    shadowing or scoping. Not synchronized, so every session should own its own Env.
    """

    def __init__(self):
        self.bindings = {}

    def store(self, name, value):
        self.bindings[name] = value

    def lookup(self, name):
        """Returns the Value bound to name, or raises UnboundName."""
        try:
            return self.bindings[name]
        except KeyError:
            raise UnboundName(name) from None

    def __contains__(self, name):
        return name in self.bindings

    def __iter__(self):
        return iter(self.bindings)

    def __len__(self):
        return len(self.bindings)

    def __eq__(self, other):
        return isinstance(other, type(self)) and other.bindings == self.bindings

    def __repr__(self):
        return f"Env({self.bindings!r})"
