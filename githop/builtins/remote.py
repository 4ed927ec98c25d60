"""
githop remote: git remote with OWNER[/REPOSITORY] shorthands.

    githop remote add jingweno             git remote add jingweno https://github.com/jingweno/REPO.git
    githop remote add -p jingweno          git remote add jingweno git@github.com:jingweno/REPO.git
    githop remote set-url origin/fork      git remote set-url origin https://github.com/USER/fork.git

REPO defaults to the current repository's name and the owner "origin" stands for the
current user. Anything else is forwarded to git remote unchanged.
"""
import logging
import re

from ..commands import Command
from ..hosting import Project

logger = logging.getLogger(__name__)

ACTIONS = ("add", "set-url")
PRIVATE = "-p"
SHORTHAND = re.compile(r"[\w.-]+(?:/[\w.-]+)?")

DESCR = """
With add or set-url, the trailing OWNER[/REPOSITORY] is expanded into a GitHub URL:
https by default, ssh with -p. REPOSITORY defaults to the current repository name and
the owner "origin" stands for the current user.
"""


def _action(args):
    # the first token that is not the private toggle
    return next((token for token in args if token != PRIVATE), None)


def expand_remote(context):
    """
    Rewrite 'add|set-url [-p] ... OWNER[/REPO]' into '... OWNER URL'.

    Returns the tokens to run after "git remote"; anything else is returned unchanged.
    """
    args = context.args
    services = context.services
    if len(args.params()) < 2 or _action(args) not in ACTIONS:
        return args.array()
    if not SHORTHAND.fullmatch(args.last()):
        return args.array()

    private = False
    while (index := args.find(PRIVATE)) != -1:
        args.remove(index)
        private = True

    owner, _, name = args.remove(-1).partition("/")
    if not name:
        name = services.repository.name()

    project = Project(owner=owner, name=name, host=services.repository.host)
    url = services.hosting(project).expand_remote_url(owner, name, private=private)
    logger.debug("expanded %s/%s to %s", owner, name, url)
    args.append(owner, url)
    return args.array()


def build():
    return Command(
        "remote",
        expand_remote,
        summary="View and manage a set of remote repositories",
        usage="remote [-p] OPTIONS USER[/REPOSITORY]",
        descr=DESCR,
        passthrough=True,
    )


__all__ = (
    "build",
)
