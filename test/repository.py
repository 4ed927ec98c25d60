# python
"""
git collaborators behavioral tests.

Scope
- Validate remote URL parsing (https, git, ssh and scp-like spellings).
- Validate LocalRepository project resolution, branch and comment-char queries.
- Validate Executor status handling and launch failures.

Conventions
- Test method names follow CamelCase per project convention.
- git itself is never run: the executor is a mock, subprocess.run is patched.
"""

from __future__ import annotations

import subprocess
import unittest
from unittest import TestCase
from unittest.mock import Mock, patch

from githop.faults import ExecutionError, RepositoryError
from githop.git import Executor, LocalRepository, parse_remote_url
from githop.hosting import Project


def createExecutor(answers):
    executor = Mock(return_value=0)
    executor.capture.side_effect = lambda tokens: answers.get(tuple(tokens))
    return executor


REMOTES = ("config", "--get-regexp", r"^remote\..*\.url$")


class TestParseRemoteUrl(TestCase):
    """Behavioral tests for parse_remote_url()."""

    def testSpellings(self):
        expected = ("github.com", "jingweno", "gh")
        for url in (
            "https://github.com/jingweno/gh.git",
            "https://github.com/jingweno/gh",
            "http://user@github.com/jingweno/gh/",
            "git://github.com/jingweno/gh.git",
            "ssh://git@github.com:22/jingweno/gh.git",
            "git@github.com:jingweno/gh.git",
            "github.com:jingweno/gh",
        ):
            with self.subTest(url=url):
                self.assertEqual(parse_remote_url(url), expected)

    def testHostIsLowercased(self):
        self.assertEqual(parse_remote_url("git@GitHub.com:o/r.git"), ("github.com", "o", "r"))

    def testNotAProject(self):
        self.assertIsNone(parse_remote_url("/srv/git/project.git"))
        self.assertIsNone(parse_remote_url("https://github.com/only-owner"))


class TestLocalRepository(TestCase):
    """Behavioral tests for LocalRepository."""

    def testPrefersUpstreamThenGithubThenOrigin(self):
        executor = createExecutor({REMOTES: (
            "remote.origin.url git@github.com:me/gh.git\n"
            "remote.upstream.url https://github.com/jingweno/gh.git"
        )})
        self.assertEqual(LocalRepository(executor).main_project(), Project("jingweno", "gh"))

    def testGithubRemoteBeatsOrigin(self):
        executor = createExecutor({REMOTES: (
            "remote.origin.url git@github.com:me/gh.git\n"
            "remote.github.url https://github.com/jingweno/gh.git"
        )})
        self.assertEqual(LocalRepository(executor).main_project(), Project("jingweno", "gh"))

    def testFallsBackToFirstRemote(self):
        executor = createExecutor({REMOTES: (
            "remote.mirror.url https://example.com/x/y.git\n"
            "remote.fork.url git@github.com:me/gh.git"
        )})
        self.assertEqual(LocalRepository(executor).main_project(), Project("me", "gh"))

    def testOtherHostsAreIgnored(self):
        executor = createExecutor({REMOTES: "remote.origin.url https://gitlab.com/me/gh.git"})
        with self.assertRaises(RepositoryError) as caught:
            LocalRepository(executor).main_project()
        self.assertEqual(caught.exception.status, 1)

    def testEnterpriseHost(self):
        executor = createExecutor({REMOTES: "remote.origin.url git@git.corp.example:team/tool.git"})
        project = LocalRepository(executor, host="git.corp.example").main_project()
        self.assertEqual(project, Project("team", "tool", "git.corp.example"))

    def testCurrentProjectFollowsUpstreamRemote(self):
        executor = createExecutor({
            REMOTES: (
                "remote.origin.url git@github.com:jingweno/gh.git\n"
                "remote.me.url git@github.com:me/gh.git"
            ),
            ("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}"): "me/feature",
        })
        self.assertEqual(LocalRepository(executor).current_project(), Project("me", "gh"))

    def testCurrentBranch(self):
        executor = createExecutor({("symbolic-ref", "--short", "-q", "HEAD"): "main"})
        self.assertEqual(LocalRepository(executor).current_branch(), "main")

    def testDetachedHead(self):
        with self.assertRaises(RepositoryError):
            LocalRepository(createExecutor({})).current_branch()

    def testCommentChar(self):
        self.assertEqual(LocalRepository(createExecutor({})).comment_char(), "#")
        auto = createExecutor({("config", "core.commentchar"): "auto"})
        self.assertEqual(LocalRepository(auto).comment_char(), "#")
        custom = createExecutor({("config", "core.commentchar"): ";"})
        self.assertEqual(LocalRepository(custom).comment_char(), ";")

    def testNameFallsBackToToplevel(self):
        executor = createExecutor({("rev-parse", "--show-toplevel"): "/home/me/src/tool"})
        self.assertEqual(LocalRepository(executor).name(), "tool")


class TestExecutor(TestCase):
    """Behavioral tests for Executor."""

    @patch("githop.git.subprocess.run")
    def testStatusIsReturned(self, run):
        run.return_value = subprocess.CompletedProcess(["git"], 7)
        self.assertEqual(Executor("git")(["status"]), 7)
        run.assert_called_once_with(["git", "status"], cwd=None)

    @patch("githop.git.subprocess.run")
    def testSignalStatus(self, run):
        run.return_value = subprocess.CompletedProcess(["git"], -2)
        self.assertEqual(Executor()(["log"]), 130)

    @patch("githop.git.subprocess.run")
    def testLaunchFailure(self, run):
        run.side_effect = FileNotFoundError(2, "No such file or directory")
        with self.assertRaises(ExecutionError):
            Executor("/missing/git")(["status"])

    @patch("githop.git.subprocess.run")
    def testCapture(self, run):
        run.return_value = subprocess.CompletedProcess(["git"], 0, stdout="main\n")
        self.assertEqual(Executor().capture(["symbolic-ref", "--short", "HEAD"]), "main")
        run.return_value = subprocess.CompletedProcess(["git"], 128, stdout="")
        self.assertIsNone(Executor().capture(["symbolic-ref", "--short", "HEAD"]))


if __name__ == "__main__":
    unittest.main()
