"""
githop built-in commands and the registry that lists them.
"""
from ..commands import Registry
from . import help, release, remote

CATEGORIES = (
    "Branching Commands",
    "Remote Commands",
    "GitHub Commands",
)


def registry():
    """
    Build a fresh, sealed Registry holding every built-in command.
    """
    commands = Registry()
    for category in CATEGORIES:
        commands.category(category)
    commands.register(remote.build(), "Remote Commands")
    commands.register(release.build(), "GitHub Commands")
    commands.register(help.build())
    return commands


__all__ = (
    "CATEGORIES",
    "registry",
)
