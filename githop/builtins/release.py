"""
githop release: list, show and create GitHub releases.

Commands
- release [-d]                     tag names of the main project's releases
- release show [-d] <TAG>          title, notes and (with -d) download URLs
- release create [...] <TAG>       create a release, then attach assets

Notes
- Every handler resolves its project through the local repository and talks to the
  host through services.hosting(project); under --noop the hosting client is never
  built, so no request leaves the machine.
- The release message comes from -m, from -f (a path, or "-" for stdin) or from the
  editor; its first paragraph is the title and the rest is the body.
- Assets are uploaded one by one after the release exists. A failed upload stops the
  loop and is reported; the release is kept.
"""
import logging
import sys

from ..commands import Command
from ..editor import split_message
from ..faults import EmptyTitleError, MessageFileError, MissingArgumentError
from ..flags import Kind
from ..hosting import Release

logger = logging.getLogger(__name__)

USAGE = """
release [-d]
release show [-d] <TAG>
release create [-dp] [-a <FILE>] [-m <MESSAGE>|-f <FILE>] [-c <COMMIT>] <TAG>
"""

DESCR = """
Manage GitHub releases of the current repository.

With no subcommand, list the tag names of the existing releases (drafts only with -d).
'show' prints the title and notes of one release; 'create' publishes a new one from a
message, a file or the editor, then attaches the given files.
"""


def _require_tag(args, route):
    if not (tag_name := args.last_param()):
        raise MissingArgumentError(
            "Missing argument TAG",
            hint="usage: githop %s <TAG>" % route,
        )
    return tag_name


def list_releases(context):
    services = context.services
    project = services.repository.main_project()

    if context.args.noop:
        services.stdout.print("Would request list of releases for %s" % project)
        return

    for release in services.hosting(project).fetch_releases(project):
        if not release.draft or context.flags.include_drafts:
            services.stdout.print(release.tag_name)


def show_release(context):
    services = context.services
    tag_name = _require_tag(context.args, "release show")
    project = services.repository.main_project()

    if context.args.noop:
        services.stdout.print("Would display information for `%s' release" % tag_name)
        return

    release = services.hosting(project).fetch_release(project, tag_name)
    out = services.stdout
    out.print("%s (%s)" % (release.name, release.tag_name))
    if body := release.body.strip():
        out.print()
        out.print(body)

    if context.flags.show_downloads:
        out.print()
        out.print("## Downloads")
        out.print()
        for asset in release.assets:
            out.print(asset.download_url)
        if release.zipball_url:
            out.print(release.zipball_url)
            out.print(release.tarball_url)


def split_asset(spec, /):
    """
    "FILE#LABEL" -> ("FILE", "LABEL"); only the first "#" separates.
    """
    path, _, label = spec.partition("#")
    return path, label


def release_template(comment_char, tag_name, project, commitish, /):
    return "\n".join((
        "",
        "%s Creating release %s for %s from %s" % (comment_char, tag_name, project, commitish),
        comment_char,
        "%s Write a message for this release. The first block of" % comment_char,
        "%s text is the title and the rest is the description." % comment_char,
        "",
    ))


def read_message_file(path, /):
    """
    Read a release message from a file, or from stdin when path is "-".
    """
    if path == "-":
        return sys.stdin.read()
    try:
        with open(path, encoding="utf-8") as file:
            return file.read()
    except OSError as error:
        raise MessageFileError(
            "unable to read %s: %s" % (path, error.strerror or error),
            hint="pass an existing file to -f, or '-' to read from stdin",
        ) from None


def create_release(context):
    services = context.services
    repository = services.repository
    flags = context.flags
    noop = context.args.noop

    tag_name = _require_tag(context.args, "release create")
    project = repository.current_project()
    commitish = flags.commitish or repository.current_branch()

    editor = None
    if flags.message:
        title, body = split_message(flags.message)
    elif flags.file:
        title, body = split_message(read_message_file(flags.file))
    else:
        comment_char = repository.comment_char()
        editor = services.editor(
            "RELEASE",
            release_template(comment_char, tag_name, project, commitish),
            comment_char=comment_char,
            directory=repository.git_dir(),
        )
        title, body = editor.edit_title_and_body()

    if not title:
        raise EmptyTitleError(
            "Aborting release due to empty release title",
            hint="write a title on the first line of the message",
        )

    assets = [split_asset(spec) for spec in flags.attach]

    if noop:
        services.stdout.print("Would create release `%s' for %s with tag name `%s'" % (title, project, tag_name))
        for path, label in assets:
            services.stderr.print("Would attach release asset `%s'%s" % (
                path, " with label `%s'" % label if label else ""
            ))
        return

    client = services.hosting(project)
    release = client.create_release(project, Release(
        tag_name=tag_name,
        name=title,
        body=body,
        target_commitish=commitish,
        draft=flags.draft,
        prerelease=flags.prerelease,
    ))
    services.stdout.print(release.html_url)
    if editor is not None:
        editor.delete()

    for path, label in assets:
        services.stderr.print("Attaching release asset `%s'..." % path)
        client.upload_release_asset(release, path, label)
    logger.debug("release %s created with %d asset(s)", tag_name, len(assets))


def build():
    release = Command(
        "release",
        list_releases,
        summary="List, show or create GitHub releases",
        usage=USAGE,
        descr=DESCR,
    )
    release.flag(Kind.BOOL, "include-drafts", "d", descr="List draft releases too.")

    show = release.command(
        "show",
        show_release,
        summary="Show the title and notes of a release",
        usage="release show [-d] <TAG>",
    )
    show.flag(Kind.BOOL, "show-downloads", "d", descr="Also print the download URLs.")

    create = release.command(
        "create",
        create_release,
        summary="Create a release and attach files to it",
        usage="release create [-dp] [-a <FILE>] [-m <MESSAGE>|-f <FILE>] [-c <COMMIT>] <TAG>",
    )
    create.flag(Kind.BOOL, "draft", "d", descr="Create an unpublished release.")
    create.flag(Kind.BOOL, "prerelease", "p", descr="Mark the release as a pre-release.")
    create.flag(Kind.STRINGS, "attach", "a", metavar="FILE", descr="Attach FILE, optionally as FILE#LABEL (repeatable).")
    create.flag(Kind.STRING, "message", "m", descr="Use MESSAGE as the title and body.")
    create.flag(Kind.STRING, "file", "f", descr="Read the message from FILE ('-' for stdin).")
    create.flag(Kind.STRING, "commitish", "c", metavar="COMMIT", descr="Tag COMMIT instead of the current branch.")
    return release


__all__ = (
    "build",
    "split_asset",
    "release_template",
)
