"""
githop hosting collaborator: the GitHub API behind the release and remote commands.

Records
- Project: OWNER/NAME on a host; str(project) -> "owner/name".
- Asset / Release: the release data the commands print (frozen dataclasses).

Client
- HostingClient wraps PyGithub for one host:
  • fetch_releases(project) / fetch_release(project, tag)
  • create_release(project, params) / upload_release_asset(release, path, label)
  • current_user() and expand_remote_url(owner, name, private)
- Every github.GithubException, every transport failure (requests.RequestException)
  and local I/O error while uploading becomes a HostingError: a checked failure the
  dispatcher reports with status 1. Nothing is retried.
"""
import dataclasses
import logging
import os.path

import requests
from github import Auth, Github, GithubException

from .faults import HostingError

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Project:
    owner: str
    name: str
    host: str = "github.com"

    def __str__(self):
        return "%s/%s" % (self.owner, self.name)

    def web_url(self):
        return "https://%s/%s/%s" % (self.host, self.owner, self.name)


@dataclasses.dataclass(frozen=True)
class Asset:
    name: str
    label: str
    download_url: str


@dataclasses.dataclass(frozen=True)
class Release:
    tag_name: str
    name: str = ""
    body: str = ""
    target_commitish: str = ""
    draft: bool = False
    prerelease: bool = False
    html_url: str = ""
    zipball_url: str = ""
    tarball_url: str = ""
    assets: tuple[Asset, ...] = ()
    handle: object = dataclasses.field(default=None, repr=False, compare=False)


def _describe(error):
    # GithubException.data is the decoded JSON error payload when there is one
    data = getattr(error, "data", None)
    if isinstance(data, dict) and data.get("message"):
        details = "; ".join(
            item.get("message") or "%s %s" % (item.get("field", ""), item.get("code", ""))
            for item in data.get("errors", ()) if isinstance(item, dict)
        )
        return "%s (HTTP %s)%s" % (data["message"], error.status, ": " + details if details else "")
    return "HTTP %s" % getattr(error, "status", "error")


class HostingClient:
    """
    PyGithub-backed client bound to one host.

    Parameters
    - host: hosting domain (github.com or a GitHub Enterprise host).
    - token: API token, or None for anonymous access.
    - api_url: REST endpoint; derived from host when omitted.
    - user: login used for the "origin" owner shortcut before asking the API.
    """

    def __init__(self, host="github.com", /, *, token=None, api_url=None, user=None):
        self._host = host
        self._user = user
        if api_url is None:
            api_url = "https://api.github.com" if host == "github.com" else "https://%s/api/v3" % host
        self._github = Github(auth=Auth.Token(token) if token else None, base_url=api_url)

    def __repr__(self):
        return "hosting-client(host=%r)" % self._host

    @property
    def host(self):
        return self._host

    def _unreachable(self, action, error):
        logger.debug("%s failed: %r", action, error)
        return HostingError(
            "%s: unable to reach %s" % (action, self._host),
            hint="check the network connection and GITHUB_HOST",
        )

    def _repository(self, project):
        logger.debug("GET repository %s on %s", project, self._host)
        try:
            return self._github.get_repo(str(project))
        except GithubException as error:
            raise HostingError(
                "Error fetching repository %s: %s" % (project, _describe(error)),
                hint="check the repository name and that GITHUB_TOKEN can read it",
            ) from None
        except requests.RequestException as error:
            raise self._unreachable("Error fetching repository %s" % project, error) from None

    @staticmethod
    def _release(handle):
        return Release(
            tag_name=handle.tag_name,
            name=handle.title or "",
            body=handle.body or "",
            target_commitish=handle.target_commitish or "",
            draft=handle.draft,
            prerelease=handle.prerelease,
            html_url=handle.html_url or "",
            zipball_url=handle.zipball_url or "",
            tarball_url=handle.tarball_url or "",
            assets=tuple(
                Asset(name=asset.name, label=asset.label or "", download_url=asset.browser_download_url)
                for asset in handle.assets or ()
            ),
            handle=handle,
        )

    def fetch_releases(self, project, /):
        repository = self._repository(project)
        logger.debug("GET releases of %s", project)
        try:
            return [self._release(handle) for handle in repository.get_releases()]
        except GithubException as error:
            raise HostingError("Error fetching releases: %s" % _describe(error)) from None
        except requests.RequestException as error:
            raise self._unreachable("Error fetching releases", error) from None

    def fetch_release(self, project, tag_name, /):
        repository = self._repository(project)
        logger.debug("GET release %s of %s", tag_name, project)
        try:
            return self._release(repository.get_release(tag_name))
        except GithubException as error:
            if error.status == 404:
                raise HostingError(
                    "Unable to find release with tag name `%s'" % tag_name,
                    hint="run 'githop release' to list the existing releases",
                ) from None
            raise HostingError("Error fetching release: %s" % _describe(error)) from None
        except requests.RequestException as error:
            raise self._unreachable("Error fetching release", error) from None

    def create_release(self, project, params, /):
        """
        Create a release from a Release record (tag, title, body, commitish, flags).
        """
        repository = self._repository(project)
        logger.debug("POST release %s on %s", params.tag_name, project)
        options = {
            "tag": params.tag_name,
            "name": params.name,
            "message": params.body,
            "draft": params.draft,
            "prerelease": params.prerelease,
        }
        if params.target_commitish:
            options["target_commitish"] = params.target_commitish
        try:
            return self._release(repository.create_git_release(**options))
        except GithubException as error:
            raise HostingError("Error creating release: %s" % _describe(error)) from None
        except requests.RequestException as error:
            raise self._unreachable("Error creating release", error) from None

    def upload_release_asset(self, release, path, label="", /):
        if release.handle is None:
            raise HostingError("Release `%s' is not bound to the API" % release.tag_name)
        logger.debug("POST asset %s to release %s", path, release.tag_name)
        try:
            handle = release.handle.upload_asset(path, label=label, name=os.path.basename(path))
        except GithubException as error:
            raise HostingError("Error uploading release asset `%s': %s" % (path, _describe(error))) from None
        except requests.RequestException as error:
            raise self._unreachable("Error uploading release asset `%s'" % path, error) from None
        except OSError as error:
            raise HostingError(
                "Error uploading release asset `%s': %s" % (path, error.strerror or error),
                hint="check that the file exists and is readable",
            ) from None
        return Asset(name=handle.name, label=handle.label or "", download_url=handle.browser_download_url)

    def current_user(self):
        if self._user:
            return self._user
        logger.debug("GET authenticated user on %s", self._host)
        try:
            self._user = self._github.get_user().login
        except GithubException as error:
            raise HostingError(
                "Error fetching the authenticated user: %s" % _describe(error),
                hint="set GITHUB_USER or a GITHUB_TOKEN to resolve 'origin'",
            ) from None
        except requests.RequestException as error:
            raise self._unreachable("Error fetching the authenticated user", error) from None
        return self._user

    def expand_remote_url(self, owner, name, /, *, private=False):
        """
        Canonical clone URL for OWNER/NAME; private selects the SSH transport.

        The owner "origin" stands for the current user.
        """
        if owner == "origin":
            owner = self.current_user()
        if private:
            return "git@%s:%s/%s.git" % (self._host, owner, name)
        return "https://%s/%s/%s.git" % (self._host, owner, name)


__all__ = (
    "Project",
    "Asset",
    "Release",
    "HostingClient",
)
