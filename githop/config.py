"""
githop settings, read once from the environment.

Variables
- GITHUB_TOKEN / GITHOP_TOKEN: API token (GITHOP_TOKEN wins when both are set).
- GITHUB_HOST: hosting domain, default "github.com".
- GITHUB_USER: login used when a remote owner is spelled "origin".
- GITHOP_GIT: git executable, default "git".
- GIT_EDITOR / VISUAL / EDITOR: editor command line, default "vi".
- GITHOP_DEBUG: any non-empty value other than "0" enables debug logging.
- NO_COLOR: any non-empty value disables colors.
"""
import os
from collections import namedtuple


class Settings(namedtuple("Settings", (
    "token",
    "host",
    "user",
    "git",
    "editor",
    "debug",
    "colorful",
))):
    """
    Immutable process settings; build with Settings.load().
    """
    __slots__ = ()

    @classmethod
    def load(cls, environ=None, /):
        environ = os.environ if environ is None else environ

        def lookup(*names, default=None):
            for name in names:
                if value := environ.get(name, "").strip():
                    return value
            return default

        return cls(
            token=lookup("GITHOP_TOKEN", "GITHUB_TOKEN"),
            host=lookup("GITHUB_HOST", default="github.com").lower(),
            user=lookup("GITHUB_USER"),
            git=lookup("GITHOP_GIT", default="git"),
            editor=lookup("GIT_EDITOR", "VISUAL", "EDITOR", default="vi"),
            debug=lookup("GITHOP_DEBUG", default="0") not in ("0", "false", "no"),
            colorful=not lookup("NO_COLOR"),
        )

    @property
    def api_url(self):
        """
        REST endpoint for the configured host (GitHub Enterprise lives under /api/v3).
        """
        if self.host == "github.com":
            return "https://api.github.com"
        return "https://%s/api/v3" % self.host


__all__ = (
    "Settings",
)
