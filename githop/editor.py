"""
githop editor collaborator: compose a title and body in the user's editor.

An Editor writes a commented template to <git-dir>/<TOPIC>_EDITMSG, launches the
configured editor on it and reads the result back. Lines starting with the comment
character are dropped; the first paragraph becomes the title (its lines joined by
spaces) and the rest, stripped, becomes the body.

The file is kept when something fails later (so the message is not lost) and only
removed through delete() once the composed text has been used.
"""
import logging
import os
import shlex
import subprocess
import tempfile

from .faults import EditorError

logger = logging.getLogger(__name__)


def split_message(message, /):
    """
    Split a message into (title, body): the first paragraph is the title.
    """
    title, _, body = message.strip().partition("\n\n")
    return " ".join(line.strip() for line in title.splitlines()).strip(), body.strip()


class Editor:
    """
    One editing session.

    Parameters
    - topic: upper-case file prefix (e.g. "RELEASE" -> RELEASE_EDITMSG).
    - template: initial file contents.
    - program: editor command line (split with shlex, may carry arguments).
    - comment_char: lines starting with it are discarded.
    - directory: where the file is written; a temporary directory when None.
    """

    def __init__(self, topic, template, /, *, program="vi", comment_char="#", directory=None):
        self._topic = topic
        self._template = template
        self._program = program
        self._comment_char = comment_char
        self._path = os.path.join(directory or tempfile.gettempdir(), "%s_EDITMSG" % topic.upper())

    def __repr__(self):
        return "editor(path=%r, program=%r)" % (self._path, self._program)

    @property
    def path(self):
        return self._path

    def _launch(self):
        command = [*shlex.split(self._program), self._path]
        logger.debug("launch editor %r", command)
        try:
            status = subprocess.run(command).returncode
        except OSError as error:
            raise EditorError(
                "unable to start editor %r: %s" % (self._program, error.strerror or error),
                hint="set GIT_EDITOR, VISUAL or EDITOR to an installed editor",
            ) from None
        if status != 0:
            raise EditorError(
                "editor %r exited with status %d" % (self._program, status),
                hint="your message was kept in %s" % self._path,
            )

    def edit(self):
        """
        Run the editor on the template and return the edited text without comments.
        """
        try:
            with open(self._path, "w", encoding="utf-8") as file:
                file.write(self._template)
        except OSError as error:
            raise EditorError("unable to write %s: %s" % (self._path, error.strerror or error)) from None

        self._launch()

        try:
            with open(self._path, encoding="utf-8") as file:
                lines = file.read().splitlines()
        except OSError as error:
            raise EditorError("unable to read %s: %s" % (self._path, error.strerror or error)) from None

        return "\n".join(line for line in lines if not line.startswith(self._comment_char))

    def edit_title_and_body(self):
        return split_message(self.edit())

    def delete(self):
        try:
            os.remove(self._path)
        except FileNotFoundError:
            pass


__all__ = (
    "Editor",
    "split_message",
)
