r"""
githop flag grammar.

Overview
- Kind: the three semantic flag kinds.
  • BOOL: presence-only switch (-d/--draft); never consumes the next token.
  • STRING: single value (-m/--message MESSAGE); the last occurrence wins.
  • STRINGS: repeated value (-a/--attach FILE); every occurrence accumulates in order.
- Switch: one declared flag (long name, optional one-character short alias, default).
- Grammar: the per-command set of switches.
  • declare(...) registers a switch; the grammar can be sealed against later changes.
  • namespace is a frozen dataclass generated from the declarations, giving handlers
    typed attribute access (flags.include_drafts, flags.attach, ...).
  • parse(args) pulls recognized flags out of an Arguments container in place and
    returns a namespace instance.

Accepted spellings
- Long: --name, --name=value, --name value, and any unique prefix of a long name
  (--pre for --prerelease). A prefix shared by several long names is ambiguous.
- Short: -x, -x value, -xVALUE, -x=VALUE, and clusters of boolean shorts (-dp),
  optionally ending with one value-taking short (-dpa FILE).
- Booleans accept an explicit --name=true / --name=false.

Pass-through tolerance
- A token that matches no declared switch is left in the container untouched, in its
  original relative position: the command may end up forwarding it to git, which has
  its own grammar. Scanning stops at a literal "--", which is left in place too.

Quick example
    >>> grammar = Grammar("release-create")
    >>> _ = grammar.declare(Kind.BOOL, "draft", "d")
    >>> _ = grammar.declare(Kind.STRINGS, "attach", "a")
    >>> args = Arguments(["-a", "f1", "v1.0", "--draft", "-a", "f2#label"])
    >>> grammar.parse(args)
    ReleaseCreateFlags(draft=True, attach=('f1', 'f2#label'))
    >>> args.array()
    ['v1.0']
"""
import dataclasses
import logging
import re
from enum import Enum

from .faults import AmbiguousSwitchError, MissingValueError, FlagValueError
from .utils import Unset, coalesce, mirror

logger = logging.getLogger(__name__)


class Kind(Enum):
    BOOL = "bool"
    STRING = "string"
    STRINGS = "strings"

    @property
    def annotation(self):
        return {Kind.BOOL: bool, Kind.STRING: str, Kind.STRINGS: tuple[str, ...]}[self]

    @property
    def default(self):
        return {Kind.BOOL: False, Kind.STRING: "", Kind.STRINGS: ()}[self]


class Switch:
    """
    One declared flag.

    Properties
    - kind: Kind of the switch.
    - name: long name without the leading "--" (e.g. "include-drafts").
    - short: one-character alias without the leading "-", or None.
    - default: value used when the flag is absent.
    - descr / metavar: help metadata (None when not given).
    - attribute: the namespace attribute derived from the long name.
    """

    __slots__ = ("_kind", "_name", "_short", "_default", "_descr", "_metavar")

    kind = mirror("kind")
    name = mirror("name")
    short = mirror("short")
    default = mirror("default")
    descr = mirror("descr")
    metavar = mirror("metavar")

    def __init__(self, kind, name, short=Unset, default=Unset, /, *, descr=Unset, metavar=Unset):
        if not isinstance(kind, Kind):
            raise TypeError("switch 'kind' must be a Kind")
        if not isinstance(name, str) or not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
            raise ValueError("switch 'name' must be a valid long option name without dashes, got %r" % (name,))
        if short is not Unset and (not isinstance(short, str) or not re.fullmatch(r"[^\W_]", short)):
            raise ValueError("switch 'short' must be a single letter or digit, got %r" % (short,))
        if not isinstance(descr, str | Unset) or not isinstance(metavar, str | Unset):
            raise TypeError("switch 'descr' and 'metavar' must be strings")

        default = coalesce(default, kind.default)
        if kind is Kind.STRINGS:
            if isinstance(default, str):
                raise TypeError("repeated switch 'default' must be an iterable of strings")
            default = tuple(default)
        elif not isinstance(default, kind.annotation):
            raise TypeError("switch 'default' must be of type %s" % kind.annotation.__name__)

        self._kind = kind
        self._name = name
        self._short = coalesce(short)
        self._default = default
        self._descr = coalesce(descr)
        self._metavar = coalesce(metavar, None if kind is Kind.BOOL else name.upper())

    def __repr__(self):
        return "switch(kind=%s, names=%r, default=%r)" % (self._kind.value, self.names, self._default)

    @property
    def attribute(self):
        return self._name.replace("-", "_")

    @property
    def names(self):
        """
        The spellings of this switch, short alias first (e.g. ("-d", "--draft")).
        """
        return (("-" + self._short,) if self._short else ()) + ("--" + self._name,)

    @property
    def takes_value(self):
        return self._kind is not Kind.BOOL


def _classname(name):
    # "release-create" -> "ReleaseCreateFlags"
    return "".join(part.capitalize() for part in re.split(r"[^0-9A-Za-z]+", name) if part) + "Flags"


class Grammar:
    """
    Per-command flag declarations and the parser that applies them.

    Lifecycle
    - Declared once while the command tree is built, then sealed by the registry.
    - Applied fresh to each invocation's Arguments, producing a new namespace instance.
    """

    def __init__(self, name="command", /):
        self._name = name
        self._switches = []
        self._longs = {}
        self._shorts = {}
        self._sealed = False
        self._namespace = Unset

    def __repr__(self):
        return "grammar(name=%r, switches=%r)" % (self._name, self._switches)

    def __iter__(self):
        return iter(tuple(self._switches))

    def __len__(self):
        return len(self._switches)

    @property
    def switches(self):
        return tuple(self._switches)

    @property
    def sealed(self):
        return self._sealed

    def seal(self):
        self._sealed = True

    def declare(self, kind, name, short=Unset, default=Unset, /, *, descr=Unset, metavar=Unset):
        """
        Register one switch and return it.

        Raises
        - TypeError: the grammar is sealed, or a parameter has the wrong type.
        - ValueError: the long name, short alias or attribute is already declared.
        """
        if self._sealed:
            raise TypeError("grammar %r is sealed and cannot declare %r" % (self._name, name))
        switch = Switch(kind, name, short, default, descr=descr, metavar=metavar)
        if switch.name in self._longs or any(other.attribute == switch.attribute for other in self._switches):
            raise ValueError("grammar %r already declares '--%s'" % (self._name, switch.name))
        if switch.short and switch.short in self._shorts:
            raise ValueError("grammar %r already declares '-%s'" % (self._name, switch.short))

        self._switches.append(switch)
        self._longs[switch.name] = switch
        if switch.short:
            self._shorts[switch.short] = switch
        self._namespace = Unset
        return switch

    @property
    def namespace(self):
        """
        Frozen dataclass type with one typed field per declared switch.
        """
        if self._namespace is Unset:
            self._namespace = dataclasses.make_dataclass(
                _classname(self._name),
                [
                    (switch.attribute, switch.kind.annotation, dataclasses.field(default=switch.default))
                    for switch in self._switches
                ],
                frozen=True,
                module=__name__,
            )
        return self._namespace

    def defaults(self):
        return self.namespace()

    def _resolve(self, name, token):
        # exact long name first, then a unique prefix of one
        if switch := self._longs.get(name):
            return switch
        if not name:
            return None
        candidates = [switch for long, switch in self._longs.items() if long.startswith(name)]
        if len(candidates) > 1:
            raise AmbiguousSwitchError(
                "option %r is ambiguous: it could be %s" % (
                    token, ", ".join("'--%s'" % switch.name for switch in candidates)
                ),
                token=token,
                hint="spell the option out in full",
            )
        return candidates[0] if candidates else None

    def _store(self, values, switch, value, token):
        match switch.kind:
            case Kind.BOOL:
                if value is True or value is False:
                    values[switch.attribute] = value
                elif value.lower() in ("true", "false"):
                    values[switch.attribute] = value.lower() == "true"
                else:
                    raise FlagValueError(
                        "flag %r does not take the value %r" % (token, value),
                        token=token,
                        hint="use '--%s' alone, or '--%s=true|false'" % (switch.name, switch.name),
                    )
            case Kind.STRING:
                values[switch.attribute] = value
            case Kind.STRINGS:
                values[switch.attribute].append(value)

    def _missing(self, switch, token):
        return MissingValueError(
            "option %r requires a value" % token,
            token=token,
            hint="pass it as '--%s <%s>' or '--%s=<%s>'" % (switch.name, switch.metavar, switch.name, switch.metavar),
        )

    def _parse_long(self, args, index, values):
        token = args.array()[index]
        name, separator, inline = token[2:].partition("=")
        if (switch := self._resolve(name, token)) is None:
            return False

        if not switch.takes_value:
            args.remove(index)
            self._store(values, switch, inline if separator else True, token)
        elif separator:
            args.remove(index)
            self._store(values, switch, inline, token)
        else:
            if index + 1 >= len(args):
                raise self._missing(switch, token)
            args.remove(index)
            self._store(values, switch, args.remove(index), token)
        return True

    def _parse_short(self, args, index, values):
        token = args.array()[index]
        cluster = token[1:]

        # resolve the whole cluster before touching the container
        pending = []
        for position, char in enumerate(cluster):
            if (switch := self._shorts.get(char)) is None:
                return False
            if not switch.takes_value:
                pending.append((switch, True))
                continue
            rest = cluster[position + 1:]
            pending.append((switch, rest.removeprefix("=") if rest else Unset))
            break

        if pending[-1][1] is Unset and index + 1 >= len(args):
            raise self._missing(pending[-1][0], "-" + pending[-1][0].short)

        args.remove(index)
        for switch, value in pending:
            if value is Unset:
                value = args.remove(index)
            self._store(values, switch, value, "-" + switch.short)
        return True

    def parse(self, args, /):
        """
        Strip every recognized flag (and its value) out of args, in place.

        Scans the remaining tokens left to right; unrecognized tokens keep their
        original relative order and become the positional remainder.

        Returns
        - an instance of self.namespace holding the resolved values.

        Raises
        - AmbiguousSwitchError, MissingValueError, FlagValueError (usage errors).
        """
        values = {
            switch.attribute: list(switch.default) if switch.kind is Kind.STRINGS else switch.default
            for switch in self._switches
        }

        index = 0
        while index < len(args):
            token = args.array()[index]
            if token == "--":
                break
            if token.startswith("--"):
                consumed = self._parse_long(args, index, values)
            elif token.startswith("-") and len(token) > 1:
                consumed = self._parse_short(args, index, values)
            else:
                consumed = False
            if not consumed:
                index += 1

        for switch in self._switches:
            if switch.kind is Kind.STRINGS:
                values[switch.attribute] = tuple(values[switch.attribute])

        flags = self.namespace(**values)
        logger.debug("parsed %s, remaining %r", flags, args.array())
        return flags


__all__ = (
    "Kind",
    "Switch",
    "Grammar",
)
