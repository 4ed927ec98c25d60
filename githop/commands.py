"""
githop command layer: the command tree, the registry and the dispatcher.

What this module provides
- Command: one node of the command tree.
  • Holds its flag grammar, an optional handler (callback) and child nodes reachable
    by a keyword (e.g. "release" → "show", "create").
  • Metadata: summary, usage, descr, listed (shown in the help listing) and
    passthrough (its result is executed by git).
  • Sealed by the registry once registered: the tree is read-only from then on.

- Registry: the top-level commands, grouped in ordered categories for the help
  listing, plus a flat name → command index for dispatch.

- Dispatcher: routes one argument vector.
  • Unknown first token → the untouched vector is forwarded to git.
  • Known command → descend into children by keyword, strip flags with the innermost
    node's grammar, and invoke its handler with a Context.
  • Router-only node without a matching keyword → its usage, status 2.
  • Faults raised on the way are reported once, on stderr, and become the status.
  The dispatcher never exits the process; it returns the status.

Handler contract
- callback(context) -> None | int
  None means success. Usage errors and checked failures are raised as faults.
- For passthrough commands the callback is a transform: it returns the tokens to
  execute after the command path (or None to use context.args as mutated), and the
  dispatcher delegates them to the injected executor.

Quick example
    registry = Registry()
    hello = Command("hello", lambda context: context.services.stdout.print("hi"), summary="Say hi")
    registry.register(hello, "Greeting Commands")
    status = Dispatcher(registry, services).dispatch(["hello"])
"""
import collections
import logging
import shlex
from enum import IntEnum

from .arguments import Arguments
from .faults import CommandException, report
from .flags import Grammar
from .usage import render_listing, render_usage
from .utils import Unset, coalesce, mirror, rename

logger = logging.getLogger(__name__)


class Status(IntEnum):
    SUCCESS = 0
    FAILURE = 1
    USAGE = 2


Services = collections.namedtuple("Services", (
    "executor",
    "repository",
    "hosting",
    "editor",
    "stdout",
    "stderr",
    "settings",
), defaults=(None,))
Services.__doc__ = """
Injectable collaborators shared by every handler of one invocation.

- executor: callable(tokens) -> int, runs git with the given tokens.
- repository: local repository queries (main_project, current_branch, comment_char, git_dir).
- hosting: callable(project) -> hosting client bound to that project's host.
- editor: callable(topic, template, **options) -> editor session.
- stdout / stderr: rich consoles.
- settings: githop.config.Settings (optional).
"""

Context = collections.namedtuple("Context", (
    "command",
    "args",
    "flags",
    "services",
    "registry",
))
Context.__doc__ = """
What a handler receives: the resolved command, the stripped Arguments, the parsed
flag namespace, the collaborators and the registry (used by help).
"""


class Command:
    """
    One node of the command tree.

    Lifecycle
    - Built while the registry is assembled: flags are declared with flag(), children
      attached with command().
    - Registry.register() seals the node and its subtree; later mutations raise TypeError.

    Notes
    - A node may both handle a bare invocation and route to children.
    - Child keywords are unique within a node.
    """

    name = mirror("name")
    summary = mirror("summary")
    usage = mirror("usage")
    descr = mirror("descr")
    listed = mirror("listed")
    passthrough = mirror("passthrough")
    children = mirror("children")

    def __init__(
            self,
            name,
            callback=None,
            /,
            *,
            summary=Unset,
            usage=Unset,
            descr=Unset,
            listed=True,
            passthrough=False,
    ):
        if not isinstance(name, str) or not (name := name.strip()) or name.startswith("-"):
            raise ValueError("command 'name' must be a non-empty string not starting with '-'")
        if callback is not None and not callable(callback):
            raise TypeError("command 'callback' must be callable")
        for label, value in (("summary", summary), ("usage", usage), ("descr", descr)):
            if not isinstance(value, str | Unset):
                raise TypeError("command %r must be a string" % label)

        self._name = name
        self._callback = callback
        self._summary = coalesce(summary, "")
        self._usage = coalesce(usage)
        self._descr = coalesce(descr)
        self._listed = bool(listed)
        self._passthrough = bool(passthrough)
        self._children = {}
        self._parent = None
        self._sealed = False
        self._grammar = Grammar(name)

    def __repr__(self):
        return "command(route=%r, children=%r, passthrough=%r)" % (self.route, tuple(self._children), self._passthrough)

    @property
    def callback(self):
        return self._callback

    @property
    def parent(self):
        return self._parent

    @property
    def grammar(self):
        return self._grammar

    @property
    def sealed(self):
        return self._sealed

    @property
    def root(self):
        return self.path[0]

    @property
    def path(self):
        """
        Nodes from the top-level command down to this one.
        """
        path = []
        node = self
        while node is not None:
            path.append(node)
            node = node._parent
        return tuple(reversed(path))

    @property
    def route(self):
        return " ".join(node.name for node in self.path)

    def _check_open(self, action):
        if self._sealed:
            raise TypeError("command %r is sealed and cannot %s" % (self.route, action))

    def flag(self, kind, name, short=Unset, default=Unset, /, **metadata):
        """
        Declare a flag on this node's grammar; see Grammar.declare().
        """
        self._check_open("declare flags")
        return self._grammar.declare(kind, name, short, default, **metadata)

    def command(self, name, callback=Unset, /, **metadata):
        """
        Create a child reachable by the keyword name, or return a decorator that will.

        Modes
        - command("show", handler, ...) -> Command
        - command("show", None, ...)    -> router-only Command
        - @command("show", ...)         -> decorator producing the Command
        """
        @rename("command")
        def wrapper(callback, /):
            self._check_open("attach children")
            child = Command(name, callback, **metadata)
            if child.name in self._children:
                raise ValueError("command %r already has a subcommand %r" % (self.route, child.name))
            child._parent = self
            child._grammar = Grammar(self._grammar_name(child.name))
            self._children[child.name] = child
            return child

        return wrapper(callback) if callback is not Unset else wrapper

    def _grammar_name(self, name):
        return "-".join(node.name for node in self.path) + "-" + name

    def seal(self):
        """
        Freeze this node, its grammar and every descendant.
        """
        self._sealed = True
        self._grammar.seal()
        for child in self._children.values():
            child.seal()
        return self


class Registry:
    """
    Top-level commands, indexed by name and grouped in ordered categories.

    Invariant
    - every command in a category appears exactly once in the index; the index may
      also hold uncategorized commands (e.g. help), which the listing leaves out.
    """

    categories = mirror("categories")

    def __init__(self):
        self._index = {}
        self._categories = {}

    def __repr__(self):
        return "registry(commands=%r, categories=%r)" % (tuple(self._index), tuple(self._categories))

    def __iter__(self):
        return iter(tuple(self._index.values()))

    def __len__(self):
        return len(self._index)

    def __contains__(self, name):
        return name in self._index

    def register(self, command, /, category=Unset):
        """
        Add a top-level command, optionally under a category, and seal it.

        Raises
        - TypeError: not a top-level Command, or category is not a string.
        - ValueError: the name is already registered.
        """
        if not isinstance(command, Command) or command.parent is not None:
            raise TypeError("register() argument must be a top-level command")
        if not isinstance(category, str | Unset):
            raise TypeError("register() category must be a string")
        if command.name in self._index:
            raise ValueError("command %r is already registered" % command.name)

        self._index[command.name] = command.seal()
        if category:
            self._categories.setdefault(category, []).append(command)
        return command

    def category(self, name, /):
        """
        Declare an (initially empty) category so the listing keeps declaration order.
        """
        self._categories.setdefault(name, [])

    def lookup(self, name, /):
        return self._index.get(name)


_NOOP_SWITCHES = frozenset({"-n", "--noop", "--dry-run"})


class Dispatcher:
    """
    Route one invocation to a command handler or to git.

    Parameters
    - registry: Registry of top-level commands.
    - services: Services (executor, consoles, collaborators).
    - prog: program name used in messages.
    """

    def __init__(self, registry, services, /, *, prog="githop"):
        self._registry = registry
        self._services = services
        self._prog = prog

    def dispatch(self, argv, /):
        """
        Dispatch argv (without the program name) and return the exit status.
        """
        args = Arguments(argv)
        while args and args.peek() in _NOOP_SWITCHES:
            args.remove(0)
            args.set_noop()

        if not args:
            render_listing(self._registry, self._services.stderr, prog=self._prog)
            return Status.USAGE

        try:
            return self._route(args)
        except CommandException as fault:
            logger.debug("invocation failed with %s", type(fault).__name__)
            report(fault, self._services.stderr, prog=self._prog)
            return fault.status

    def _route(self, args):
        command = self._registry.lookup(args.peek())
        if command is None:
            logger.debug("no command named %r, forwarding to git", args.peek())
            return self._delegate(args.argv(), args)

        args.consume()
        while True:
            child = command.children.get(args.peek())
            if child is None:
                flags = command.grammar.parse(args)
                if (child := command.children.get(args.peek())) is None:
                    break
            args.consume()
            command = child

        logger.debug("resolved %r with %r", command.route, args.array())

        if command.callback is None:
            render_usage(command, self._services.stderr, prog=self._prog)
            return Status.USAGE

        result = command.callback(Context(command, args, flags, self._services, self._registry))

        if command.passthrough:
            tokens = args.array() if result is None else list(result)
            return self._delegate([*args.command, *tokens], args)
        return Status.SUCCESS if result is None else result

    def _delegate(self, tokens, args):
        if args.noop:
            self._services.stdout.print("Would run: git %s" % shlex.join(tokens))
            return Status.SUCCESS
        return self._services.executor(tokens)


__all__ = (
    "Status",
    "Services",
    "Context",
    "Command",
    "Registry",
    "Dispatcher",
)
