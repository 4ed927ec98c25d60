"""
githop faults (usage errors and checked failures) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- CommandException: base type that carries message + options, knows the process
  status it maps to, and renders itself in a friendly, actionable way.
- UsageError / CheckedError: the two families of the taxonomy.
  • usage errors (status 2): the invocation itself is wrong; nothing was done.
  • checked errors (status 1): a collaborator (git, the editor, the hosting API)
    reported a failure; whatever already happened is not rolled back.
- trigger(): merge runtime options into a fault and raise it.
- report(): render a fault on a console.

UX goals
- Short titles, one-sentence bodies, a single clear hint.
- Styling is configurable via a __styles__ mapping in __main__.

Integration
- Handlers and collaborators raise faults; the dispatcher catches CommandException,
  reports it on stderr and turns it into the exit status. Nothing here exits.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across githop (stable identifiers).

    grouping (by high-level domain)
    - arguments (211xx)
      • EMPTY_ARGUMENTS, MISSING_ARGUMENT, TOO_MANY_ARGUMENTS
    - switches (212xx)
      • AMBIGUOUS_SWITCH, MISSING_VALUE, FLAG_VALUE
    - collaborators (221xx)
      • EXECUTION_FAILED, REPOSITORY_FAILED, HOSTING_FAILED, EDITOR_FAILED
    - content (222xx)
      • EMPTY_TITLE, MESSAGE_FILE
    """
    # --- argument errors ---
    EMPTY_ARGUMENTS    = 21101
    MISSING_ARGUMENT   = 21102
    TOO_MANY_ARGUMENTS = 21103

    # --- switch errors ---
    AMBIGUOUS_SWITCH   = 21201
    MISSING_VALUE      = 21202
    FLAG_VALUE         = 21203

    # --- collaborator failures ---
    EXECUTION_FAILED   = 22101
    REPOSITORY_FAILED  = 22102
    HOSTING_FAILED     = 22103
    EDITOR_FAILED      = 22104

    # --- content failures ---
    EMPTY_TITLE        = 22201
    MESSAGE_FILE       = 22202

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    Base of every fault githop raises on purpose.

    Class attributes
    - status: process exit status the fault maps to.
    - code: FaultCode used in the rendered header.
    - title: short, lowercased title used in the rendered header.

    Options (read-only mapping)
    - hint: one actionable sentence shown under the message.
    - colorful: whether styles are applied while rendering (default True).
    - fancy: render inside a rich Panel instead of plain lines (default False).
    - prog: program name shown in the header (default "githop").
    Any other option is kept as context (e.g. token, index, tag).
    """
    status = 1
    code = Unset
    title = "command error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message else self.title

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        code = self.options.get("code", self.code)
        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", getattr(main, "__prog__", "githop")), "prog-name"),
            " — ",
            text(code.normalize() if code else "-", "code"),
            " | ",
            text(self.options.get("title", self.title).title(), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")

        parts = [message]
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*parts), title=header, title_align="left")
        return Group(header, *parts)

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UsageError(CommandException):
    status = 2
    title = "usage error"


class CheckedError(CommandException):
    status = 1
    title = "command failed"


class EmptyArgumentsError(UsageError, IndexError):
    code = FaultCode.EMPTY_ARGUMENTS
    title = "no arguments"


class MissingArgumentError(UsageError):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"


class TooManyArgumentsError(UsageError):
    code = FaultCode.TOO_MANY_ARGUMENTS
    title = "too many arguments"


class AmbiguousSwitchError(UsageError):
    code = FaultCode.AMBIGUOUS_SWITCH
    title = "ambiguous option"


class MissingValueError(UsageError):
    code = FaultCode.MISSING_VALUE
    title = "missing option value"


class FlagValueError(UsageError):
    code = FaultCode.FLAG_VALUE
    title = "invalid flag value"


class ExecutionError(CheckedError):
    code = FaultCode.EXECUTION_FAILED
    title = "git failed"


class RepositoryError(CheckedError):
    code = FaultCode.REPOSITORY_FAILED
    title = "repository error"


class HostingError(CheckedError):
    code = FaultCode.HOSTING_FAILED
    title = "github request failed"


class EditorError(CheckedError):
    code = FaultCode.EDITOR_FAILED
    title = "editor failed"


class EmptyTitleError(CheckedError):
    code = FaultCode.EMPTY_TITLE
    title = "empty title"


class MessageFileError(CheckedError):
    code = FaultCode.MESSAGE_FILE
    title = "unreadable message file"


def trigger(fault, /, **options):
    """
    raise a fault with the given runtime options merged in.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace(fault, **options).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def report(fault, console, /, **options):
    """
    render a fault on the given rich console.

    colors follow the console: a console without a color system renders plain text.
    """
    console.print(copy.replace(fault, **{"colorful": console.color_system is not None} | options))


__all__ = (
    "FaultCode",
    "CommandException",
    "UsageError",
    "CheckedError",
    "EmptyArgumentsError",
    "MissingArgumentError",
    "TooManyArgumentsError",
    "AmbiguousSwitchError",
    "MissingValueError",
    "FlagValueError",
    "ExecutionError",
    "RepositoryError",
    "HostingError",
    "EditorError",
    "EmptyTitleError",
    "MessageFileError",
    "trigger",
    "report",
)
