"""
githop git collaborators.

- Executor: runs the git binary with inherited standard streams and returns its
  exit status unchanged; capture() runs a read-only query and returns its output.
- LocalRepository: the handful of questions the commands ask the local repository
  (which GitHub project is this, which branch is checked out, which comment
  character does git use, where is the git directory).
- parse_remote_url(): OWNER/NAME extraction from https, git, ssh and scp-like URLs.
"""
import logging
import os.path
import re
import subprocess

from .faults import ExecutionError, RepositoryError
from .hosting import Project

logger = logging.getLogger(__name__)


class Executor:
    """
    Callable running git: executor(tokens) -> exit status.

    A git killed by a signal reports 128 + signal number, the way shells do.
    """

    def __init__(self, git="git", /, *, cwd=None):
        self._git = git
        self._cwd = cwd

    def __repr__(self):
        return "executor(git=%r)" % self._git

    def __call__(self, tokens, /):
        command = [self._git, *tokens]
        logger.debug("exec %r", command)
        try:
            status = subprocess.run(command, cwd=self._cwd).returncode
        except OSError as error:
            raise ExecutionError(
                "unable to run %r: %s" % (self._git, error.strerror or error),
                hint="install git or point GITHOP_GIT at the git executable",
            ) from None
        return 128 - status if status < 0 else status

    def capture(self, tokens, /):
        """
        Run a git query; return its stripped stdout, or None when git reports failure.
        """
        command = [self._git, *tokens]
        logger.debug("query %r", command)
        try:
            completed = subprocess.run(command, cwd=self._cwd, capture_output=True, text=True)
        except OSError as error:
            raise ExecutionError(
                "unable to run %r: %s" % (self._git, error.strerror or error),
                hint="install git or point GITHOP_GIT at the git executable",
            ) from None
        if completed.returncode != 0:
            return None
        return completed.stdout.strip()


_REMOTE_URL = re.compile(r"""
    ^(?:
        (?:https?|git|ssh|git\+ssh)://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/
      | (?:[^@/]+@)?(?P<scphost>[^/:]+):
    )
    (?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$
""", re.VERBOSE)


def parse_remote_url(url, /):
    """
    Return (host, owner, name) for a remote URL, or None when it is not one.
    """
    if not (match := _REMOTE_URL.match(url.strip())):
        return None
    return (match["host"] or match["scphost"]).lower(), match["owner"], match["name"]


class LocalRepository:
    """
    Read-only queries against the repository in the current directory.

    Parameters
    - executor: Executor used for the git queries.
    - host: hosting domain whose remotes count as projects.
    """

    PREFERRED_REMOTES = ("upstream", "github", "origin")

    def __init__(self, executor, /, *, host="github.com"):
        self._executor = executor
        self._host = host.lower()

    def __repr__(self):
        return "local-repository(host=%r)" % self._host

    @property
    def host(self):
        return self._host

    def remotes(self):
        """
        Mapping of remote name to URL, in git's configuration order.
        """
        output = self._executor.capture(["config", "--get-regexp", r"^remote\..*\.url$"])
        remotes = {}
        for line in (output or "").splitlines():
            key, _, url = line.partition(" ")
            remotes.setdefault(key.removeprefix("remote.").removesuffix(".url"), url.strip())
        return remotes

    def projects(self):
        """
        Mapping of remote name to Project for the remotes living on the configured host.
        """
        projects = {}
        for remote, url in self.remotes().items():
            if (parsed := parse_remote_url(url)) and parsed[0] == self._host:
                projects[remote] = Project(owner=parsed[1], name=parsed[2], host=self._host)
        return projects

    def main_project(self):
        """
        The project of the preferred remote (upstream, github, origin), else the first one.
        """
        if not (projects := self.projects()):
            raise RepositoryError(
                "Aborted: the origin remote doesn't point to a %s repository." % self._host,
                hint="run this command inside a clone of a %s repository" % self._host,
            )
        for remote in self.PREFERRED_REMOTES:
            if remote in projects:
                return projects[remote]
        return next(iter(projects.values()))

    def current_project(self):
        """
        The project of the current branch's upstream remote, falling back to main_project().
        """
        upstream = self._executor.capture(["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}"])
        if upstream and "/" in upstream:
            if project := self.projects().get(upstream.split("/", 1)[0]):
                return project
        return self.main_project()

    def current_branch(self):
        """
        Short name of the checked-out branch.
        """
        if not (branch := self._executor.capture(["symbolic-ref", "--short", "-q", "HEAD"])):
            raise RepositoryError(
                "Aborted: not currently on any branch.",
                hint="check out a branch or pass a commitish explicitly",
            )
        return branch

    def comment_char(self):
        char = self._executor.capture(["config", "core.commentchar"])
        return "#" if not char or char == "auto" else char

    def git_dir(self):
        return self._executor.capture(["rev-parse", "-q", "--git-dir"])

    def name(self):
        """
        Repository name: the main project's name, else the working tree's directory name.
        """
        try:
            return self.main_project().name
        except RepositoryError:
            toplevel = self._executor.capture(["rev-parse", "--show-toplevel"])
            return os.path.basename(toplevel or os.getcwd())


__all__ = (
    "Executor",
    "LocalRepository",
    "parse_remote_url",
)
