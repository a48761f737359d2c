"""CLI entry point for veisku."""

import logging
import shlex

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import command_for
from .errors import DocumentReadError, DocumentRootError, LaunchError, UnknownFilterError
from .launcher import build_command, find_script, spawn_foreground
from .models import Ambiguous, Document, DocumentRoot, Found, Query
from .query import parse_query, preset_query, select_many, select_one
from .render import CommandPager, print_listing
from .root import load_root
from .vault import DocumentStore

console = Console()
err_console = Console(stderr=True)

# Number of candidates shown for an ambiguous selection.
MAX_CANDIDATES = 10

LAUNCH_FAILURE_STATUS = 127


class ScriptGroup(click.Group):
    """Command group that runs custom scripts for unknown subcommands."""

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        return _script_command(cmd_name)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


@click.group(cls=ScriptGroup)
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
@click.option("--pager", default=None, help="Command used to page `ls` output (empty disables paging)")
@click.version_option(__version__, prog_name="veisku")
@click.pass_context
def cli(ctx, verbose, pager):
    """veisku - personal file-oriented document manager.

    Any other NAME runs `.veisku/bin/NAME` or `v-NAME` from PATH inside the
    document root.
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["pager"] = pager


def _fail(ctx, message: str, code: int = 1):
    err_console.print(f"[red]{escape(message)}[/]", soft_wrap=True)
    ctx.exit(code)


def _get_root(ctx) -> DocumentRoot:
    if "root" not in ctx.obj:
        try:
            ctx.obj["root"] = load_root()
        except DocumentRootError as e:
            _fail(ctx, f"Failed to get the document root: {e}")
    return ctx.obj["root"]


def _build_query(ctx, root: DocumentRoot, preset: str, criteria: tuple[str, ...], implicit: str) -> Query:
    try:
        base = preset_query(root.config, preset, implicit=implicit)
    except UnknownFilterError as e:
        _fail(ctx, str(e))
    return base & parse_query(criteria, implicit=implicit)


def _select_document(ctx, preset: str, criteria: tuple[str, ...]) -> tuple[DocumentRoot, Document]:
    root = _get_root(ctx)
    query = _build_query(ctx, root, preset, criteria, implicit="id")
    try:
        resolution = select_one(DocumentStore(root), query)
    except (DocumentRootError, DocumentReadError) as e:
        _fail(ctx, str(e))

    if isinstance(resolution, Found):
        return root, resolution.document

    if isinstance(resolution, Ambiguous):
        lines = ["Ambiguous document selection. Candidates:"]
        lines += [f" - {doc_id}" for doc_id in resolution.ids[:MAX_CANDIDATES]]
        if len(resolution.ids) > MAX_CANDIDATES:
            lines.append(" - (truncated)")
        _fail(ctx, "\n".join(lines))

    key = resolution.key
    _fail(ctx, f"No document matches '{key}'" if key else "No document matches the query")


def _spawn(ctx, argv: list[str], cwd) -> None:
    try:
        status = spawn_foreground(argv, cwd=cwd)
    except LaunchError as e:
        _fail(ctx, str(e), LAUNCH_FAILURE_STATUS)
    ctx.exit(status)


def filter_option(f):
    return click.option(
        "--filter", "-f", "preset", default="default",
        help="Pre-defined filter from the configuration (empty disables the default filter)",
    )(f)


@cli.command()
@filter_option
@click.argument("criteria", nargs=-1)
@click.pass_context
def which(ctx, preset, criteria):
    """Print the path of a document."""
    _, doc = _select_document(ctx, preset, criteria)
    click.echo(str(doc.path))


def _open_command(name: str, kind: str, help_text: str):
    @click.option("--command", "-c", "command", default=None,
                  help="Command to run; `{}` is replaced with the document path, otherwise it is appended")
    @click.option("--preserve-pwd", "-p", is_flag=True, help="Do not cd to the document root")
    @filter_option
    @click.argument("criteria", nargs=-1)
    @click.pass_context
    def open_document(ctx, command, preserve_pwd, preset, criteria):
        root, doc = _select_document(ctx, preset, criteria)
        template = shlex.split(command) if command else command_for(root.config, kind)
        _spawn(ctx, build_command(template, doc.path), None if preserve_pwd else root.path)

    open_document.__doc__ = f"{help_text}\n\nThe criteria must select exactly one document."
    return cli.command(name)(open_document)


open_cmd = _open_command("open", "opener", "Open a document with the default application.")
show_cmd = _open_command("show", "pager", "Show a document in the pager.")
edit_cmd = _open_command("edit", "editor", "Edit a document.")


@cli.command()
@click.option("--simple", "-1", is_flag=True, help="Display only full paths")
@click.option("--json", "-j", "as_json", is_flag=True, help="Display the result in JSON")
@filter_option
@click.argument("criteria", nargs=-1)
@click.pass_context
def ls(ctx, simple, as_json, preset, criteria):
    """List documents matching all criteria."""
    if simple and as_json:
        raise click.UsageError("--simple and --json are mutually exclusive")

    root = _get_root(ctx)
    query = _build_query(ctx, root, preset, criteria, implicit="title")
    try:
        docs = select_many(DocumentStore(root), query)
        if not simple:
            docs = [doc.load() for doc in docs]
    except (DocumentRootError, DocumentReadError) as e:
        _fail(ctx, str(e))

    mode = "simple" if simple else "json" if as_json else "pretty"
    theme = root.config.get("theme") or {}

    pager = ctx.obj.get("pager")
    pager_argv = shlex.split(pager) if pager is not None else command_for(root.config, "pager")
    if console.is_terminal and pager_argv:
        with console.pager(pager=CommandPager(pager_argv), styles=True):
            print_listing(console, docs, theme, mode)
    else:
        print_listing(console, docs, theme, mode)


@cli.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run(ctx, command):
    """Execute a command in the document root (default: the configured shell)."""
    root = _get_root(ctx)
    argv = list(command) or command_for(root.config, "run")
    _spawn(ctx, argv, root.path)


def _script_command(name: str) -> click.Command:
    @click.pass_context
    def run_script(ctx, args):
        root = _get_root(ctx)
        script = find_script(root.marker_dir, name)
        if script is None:
            _fail(ctx, f"No such command '{name}'", 2)
        _spawn(ctx, [*script, *args], root.path)

    return click.Command(
        name,
        callback=run_script,
        params=[click.Argument(["args"], nargs=-1, type=click.UNPROCESSED)],
        context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
        add_help_option=False,
        help=f"Run the custom script '{name}'.",
    )


if __name__ == "__main__":
    cli()
