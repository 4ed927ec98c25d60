"""
githop entry point: wire settings, consoles, logging and collaborators, then dispatch.
"""
import functools
import sys

from . import logs
from .builtins import registry
from .commands import Dispatcher, Services
from .config import Settings
from .editor import Editor
from .git import Executor, LocalRepository
from .hosting import HostingClient
from .usage import console


def services(settings, /):
    """
    Build the production collaborators for one invocation.
    """
    executor = Executor(settings.git)
    clients = {}

    def hosting(project):
        if project.host not in clients:
            clients[project.host] = HostingClient(
                project.host,
                token=settings.token,
                api_url=settings.api_url if project.host == settings.host else None,
                user=settings.user,
            )
        return clients[project.host]

    return Services(
        executor=executor,
        repository=LocalRepository(executor, host=settings.host),
        hosting=hosting,
        editor=functools.partial(Editor, program=settings.editor),
        stdout=console(colorful=settings.colorful),
        stderr=console(stderr=True, colorful=settings.colorful),
        settings=settings,
    )


def main(argv=None, /):
    settings = Settings.load()
    collaborators = services(settings)
    logs.setup(collaborators.stderr, debug=settings.debug)

    dispatcher = Dispatcher(registry(), collaborators)
    try:
        status = dispatcher.dispatch(sys.argv[1:] if argv is None else argv)
    except KeyboardInterrupt:
        status = 130
    sys.exit(int(status))


if __name__ == "__main__":
    main()
