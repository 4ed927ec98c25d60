"""
githop help: the command listing, or the usage of one command.
"""
from ..commands import Command, Status
from ..faults import TooManyArgumentsError
from ..usage import render_listing, render_usage


def show_help(context):
    services = context.services
    args = context.args

    if args.empty:
        render_listing(context.registry, services.stdout)
        return
    if len(args) > 1:
        raise TooManyArgumentsError(
            "help takes at most one topic, got %d" % len(args),
            hint="run 'githop help [command]'",
        )

    topic = args.first()
    if (command := context.registry.lookup(topic)) is None:
        services.stderr.print("Unknown help topic: %r. Run 'githop help'." % topic)
        return Status.USAGE
    render_usage(command, services.stdout)


def build():
    return Command(
        "help",
        show_help,
        summary="Show the command listing or the usage of a command",
        usage="help [command]",
        listed=False,
    )


__all__ = (
    "build",
)
