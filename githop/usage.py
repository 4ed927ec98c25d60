"""
githop usage rendering (rich).

- console(...): build a rich Console the way githop prints: no markup parsing and no
  highlighting (tag names, paths and URLs are printed verbatim), soft wrapping so long
  URLs stay on one line, and optional colors.
- render_listing(registry, console): the categorized command listing shown by
  'githop help' and on a bare invocation.
- render_usage(command, console): one command's usage lines, description, subcommands
  and options (generated from its grammar and its children's grammars).

Palette keys (override through a __styles__ mapping in __main__)
- usage-label, program-name, category-label, command-name, summary,
  option-name, metavar, description, footer
"""
from collections import defaultdict

from rich.console import Console
from rich.table import Table
from rich.text import Text


def console(*, stderr=False, file=None, colorful=True, width=None):
    """
    Create a Console configured for githop output.
    """
    return Console(
        file=file,
        stderr=stderr,
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
        no_color=not colorful,
        color_system="auto" if colorful else None,
        width=width,
    )


def _styler(console):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "category-label": "bold #FFFFFF",
        "command-name": "bold #36C5F0",
        "summary": "#9CA3AF",
        "option-name": "bold #22C55E",
        "metavar": "bold #FFD600",
        "description": "",
        "footer": "#737373",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        if console.color_system is None:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    return text


def render_listing(registry, console, /, *, prog="githop"):
    """
    Print every listed command, grouped by category in registration order.

    Empty categories (or categories whose commands are all unlisted) are skipped.
    """
    text = _styler(console)
    console.print(Text.assemble(
        text("Usage: ", "usage-label"), text(prog, "program-name"), " [command] [options] [arguments]"
    ))

    for category, commands in registry.categories.items():
        listed = [command for command in commands if command.listed]
        if not listed:
            continue
        console.print()
        console.print(text(category + ":", "category-label"))
        for command in listed:
            console.print(Text.assemble(
                "    ", text(command.name.ljust(16), "command-name"), "  ", text(command.summary, "summary")
            ))

    console.print()
    console.print(text("See '%s help [command]' for more information about a command." % prog, "footer"))


def _synopsis(command, prog):
    if command.usage:
        lines = [line.strip() for line in command.usage.strip().splitlines() if line.strip()]
        return ["%s %s" % (prog, line) for line in lines]
    flags = " ".join("[%s]" % switch.names[0] for switch in command.grammar)
    return [" ".join(part for part in (prog, command.route, flags) if part)]


def _options(command):
    # the command's own switches first, then its direct children's
    seen = set()
    for node in (command, *command.children.values()):
        for switch in node.grammar:
            if (node.name, switch.name) in seen:
                continue
            seen.add((node.name, switch.name))
            yield node, switch


def render_usage(command, console, /, *, prog="githop"):
    """
    Print the usage of one command: synopsis, description, subcommands and options.
    """
    text = _styler(console)

    for index, line in enumerate(_synopsis(command, prog)):
        label = "Usage: " if index == 0 else "       "
        console.print(Text.assemble(text(label, "usage-label"), line))

    if command.descr:
        console.print()
        console.print(text(command.descr.strip(), "description"))

    if command.children:
        console.print()
        console.print(text("Commands:", "category-label"))
        table = Table.grid(padding=(0, 2))
        for child in command.children.values():
            table.add_row(Text("  ") + text(child.name, "command-name"), text(child.summary, "summary"))
        console.print(table)

    options = list(_options(command))
    if options:
        console.print()
        console.print(text("Options:", "category-label"))
        table = Table.grid(padding=(0, 2))
        for node, switch in options:
            names = Text(", ").join(text(name, "option-name") for name in switch.names)
            if switch.metavar:
                names = Text.assemble(names, " ", text("<%s>" % switch.metavar, "metavar"))
            scope = "" if node is command else "(%s) " % node.name
            table.add_row(Text("  ") + names, text(scope + (switch.descr or ""), "summary"))
        console.print(table)


__all__ = (
    "console",
    "render_listing",
    "render_usage",
)
