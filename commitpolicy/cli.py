"""CLI entrypoint for commitpolicy."""

import logging
import sys
from pathlib import Path

import click
from rich.logging import RichHandler

from . import __version__
from .errors import ConfigError, GitError
from .policy import CommitPolicy, load_project_policy


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_time=False, show_path=False)],
        force=True,
    )


def _load_policy(ctx: click.Context) -> CommitPolicy:
    try:
        return load_project_policy(ctx.obj.get("config"))
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(__version__, prog_name="commitpolicy")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a .commitpolicy.toml or pyproject.toml (defaults to auto-detected)",
)
@click.option("--verbose", is_flag=True, help="Log config resolution and git calls")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """commitpolicy - Conventional commit message linter.

    Checks commit messages against a declarative policy that extends
    config-conventional.
    """
    ctx.ensure_object(dict)
    _configure_logging(verbose)
    ctx.obj["config"] = config


@cli.command()
@click.argument(
    "message_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
    required=False,
)
@click.option(
    "--edit",
    "-e",
    is_flag=True,
    help="Lint the message git is currently editing (.git/COMMIT_EDITMSG)",
)
@click.option("--from", "from_ref", type=str, default=None, metavar="REF", help="Lint commits after REF")
@click.option("--to", "to_ref", type=str, default=None, metavar="REF", help="Lint commits up to REF (default HEAD)")
@click.option(
    "--fail-on",
    type=click.Choice(["error", "warning"]),
    default="error",
    help="Exit with error if this level or higher found",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON",
)
@click.option("--quiet", "-q", is_flag=True, help="Only show messages with findings")
@click.pass_context
def lint(
    ctx: click.Context,
    message_file: Path | None,
    edit: bool,
    from_ref: str | None,
    to_ref: str | None,
    fail_on: str,
    output_json: bool,
    quiet: bool,
) -> None:
    """Check commit messages against the policy.

    The message is read from MESSAGE_FILE, from stdin ("-" or piped input),
    from the message being edited (--edit), or from a git range (--from/--to).

    Exit status is 1 when any message has an error-level violation or an
    unparsable header.
    """
    from .commands.lint import run_lint
    from .git import edit_message_path, read_commit_messages

    sources = sum(bool(x) for x in (message_file, edit, from_ref or to_ref))
    if sources > 1:
        raise click.UsageError("Pass only one of MESSAGE_FILE, --edit, or --from/--to.")

    policy = _load_policy(ctx)

    try:
        if from_ref or to_ref:
            messages = read_commit_messages(from_ref, to_ref or "HEAD")
        elif edit:
            path = edit_message_path()
            messages = [(None, path.read_text(encoding="utf-8"))]
        elif message_file is not None and str(message_file) != "-":
            messages = [(None, message_file.read_text(encoding="utf-8"))]
        elif message_file is not None or not sys.stdin.isatty():
            messages = [(None, click.get_text_stream("stdin").read())]
        else:
            raise click.UsageError("No commit message given. Pass a file, pipe one on stdin, or use --edit.")
    except GitError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Cannot read commit message: {e}") from e

    exit_code = run_lint(policy, messages, fail_on=fail_on, output_json=output_json, quiet=quiet)
    sys.exit(exit_code)


@cli.command("print-config")
@click.option("--json", "output_json", is_flag=True, help="Output the resolved policy as JSON")
@click.pass_context
def print_config(ctx: click.Context, output_json: bool) -> None:
    """Show the resolved policy (base rule sets merged with local rules)."""
    from .commands.config_cmd import run_print_config

    sys.exit(run_print_config(_load_policy(ctx), output_json=output_json))


@cli.command()
def rules() -> None:
    """List the rules this linter implements."""
    from .commands.config_cmd import run_list_rules

    sys.exit(run_list_rules())


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
