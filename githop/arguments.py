"""
githop argument container.

Overview
- Arguments: a mutable, order-preserving view over the process argument vector.
  • The leading tokens that named the command path (e.g. "release", "create") are
    consumed by moving a cursor; everything after the cursor is the remainder that
    flag grammars and handlers inspect and mutate in place.
  • Positional helpers (first/last/last_param/params) and mutation helpers
    (remove/insert/replace/append) all address the remainder.
  • array() materializes the remainder; argv() materializes the full vector that
    would be handed to git (consumed command path + remainder).
  • A one-way no-op latch: once set, handlers describe their effects instead of
    performing them.

Lifecycle
- Built once per invocation by the dispatcher from sys.argv[1:], passed by reference
  through the dispatch chain and mutated in place.

Quick example
    >>> args = Arguments(["remote", "add", "-p", "octocat"])
    >>> args.consume()
    'remote'
    >>> args.remove(args.find("-p"))
    '-p'
    >>> args.array()
    ['add', 'octocat']
    >>> args.argv()
    ['remote', 'add', 'octocat']
"""
from collections.abc import Iterable

from .faults import EmptyArgumentsError


class Arguments:
    """
    Ordered token sequence with a consumed-prefix cursor and a no-op latch.

    Invariants
    - Token order is preserved except for explicit insert/remove operations.
    - Removing by index shifts every later index down by one.
    - The cursor only moves forward; the no-op latch can only be set.
    """

    __slots__ = ("_tokens", "_cursor", "_noop")

    def __init__(self, tokens=(), /, *, noop=False):
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("Arguments() argument must be an iterable of strings")
        self._tokens = []
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("Arguments() argument must be an iterable of strings")
            self._tokens.append(token)
        self._cursor = 0
        self._noop = bool(noop)

    def __repr__(self):
        return "arguments(command=%r, params=%r, noop=%r)" % (self.command, self.array(), self._noop)

    def __len__(self):
        return len(self._tokens) - self._cursor

    def __bool__(self):
        return len(self) > 0

    def __iter__(self):
        return iter(self.array())

    def __contains__(self, token):
        return self.find(token) != -1

    @property
    def command(self):
        """
        The consumed command-path tokens, in order.
        """
        return tuple(self._tokens[:self._cursor])

    @property
    def empty(self):
        return not self

    @property
    def noop(self):
        return self._noop

    def set_noop(self):
        """
        Latch the no-op mode on; it cannot be cleared.
        """
        self._noop = True

    def size(self):
        return len(self)

    def consume(self):
        """
        Move the first remaining token into the command path and return it.
        """
        token = self.first()
        self._cursor += 1
        return token

    def peek(self):
        """
        Return the first remaining token, or None when nothing remains.
        """
        return self._tokens[self._cursor] if self else None

    def first(self):
        if not self:
            raise EmptyArgumentsError("expected at least one argument but none remain", hint="see 'githop help'")
        return self._tokens[self._cursor]

    def last(self):
        if not self:
            raise EmptyArgumentsError("expected at least one argument but none remain", hint="see 'githop help'")
        return self._tokens[-1]

    def find(self, token, /):
        """
        Return the index of token among the remaining tokens, or -1 when absent.
        """
        try:
            return self._tokens.index(token, self._cursor) - self._cursor
        except ValueError:
            return -1

    def _absolute(self, index):
        # remainder-relative index (negative allowed) to a position in self._tokens
        if not isinstance(index, int):
            raise TypeError("argument index must be an integer")
        size = len(self)
        if not -size <= index < size:
            raise IndexError("argument index %d out of range (%d remaining)" % (index, size))
        return self._cursor + (index % size)

    def remove(self, index, /):
        """
        Remove and return the remaining token at index; later tokens shift down by one.

        Raises
        - IndexError: when index does not address a remaining token.
        """
        return self._tokens.pop(self._absolute(index))

    def replace(self, index, token, /):
        """
        Replace the remaining token at index, returning the previous one.
        """
        position = self._absolute(index)
        previous, self._tokens[position] = self._tokens[position], token
        return previous

    def insert(self, index, /, *tokens):
        """
        Insert tokens before the remaining token at index; index == len(self) appends.
        """
        if not isinstance(index, int):
            raise TypeError("argument index must be an integer")
        if not 0 <= index <= len(self):
            raise IndexError("argument index %d out of range (%d remaining)" % (index, len(self)))
        position = self._cursor + index
        self._tokens[position:position] = tokens

    def append(self, *tokens):
        self._tokens.extend(tokens)

    def params(self):
        """
        Remaining tokens that do not look like flags, in order.
        """
        return [token for token in self.array() if not token.startswith("-")]

    def last_param(self):
        """
        The last remaining non-flag token, or "" when there is none.

        Meant to be called after the command's grammar stripped its flags, so a
        flag value such as a message never masquerades as the trailing argument.
        """
        for token in reversed(self.array()):
            if not token.startswith("-"):
                return token
        return ""

    def array(self):
        return self._tokens[self._cursor:]

    def argv(self):
        return list(self._tokens)


__all__ = (
    "Arguments",
)
