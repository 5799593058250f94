"""CLI interface for pydirsync."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from .cli_progress import SyncMessageDisplay
from .exceptions import DirSyncComparisonError, DirSyncIOError, DirSyncNotFoundError
from .output import OutputFormatter
from .sync import (
    ContentComparator,
    MessageLevel,
    SyncConfigError,
    SyncEngine,
    SyncPair,
    SyncPolicy,
    load_sync_pairs_from_json,
    summarize_messages,
)
from .utils import DEFAULT_HASH_ALGORITHM

logger = logging.getLogger(__name__)

POLICY_CHOICES = click.Choice(["full", "differential", "diff"], case_sensitive=False)
VERBOSITY_CHOICES = click.Choice(
    ["debug", "information", "fileio", "warning", "error"], case_sensitive=False
)


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="pydirsync")
@click.pass_context
def main(ctx: Any, quiet: bool, json: bool, verbose: bool) -> None:
    """PyDirSync - Mirror a directory tree into another one."""
    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pydirsync").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


def _sync_one_pair(out: OutputFormatter, engine: SyncEngine, pair: SyncPair) -> dict:
    """Run one pair and render its messages.

    Returns:
        Result dictionary (pair settings, messages, per-level summary, ok flag)
    """
    result: dict[str, Any] = pair.to_dict()

    if not out.quiet and not out.json_output:
        out.info(f"Syncing: {pair.source} => {pair.destination}")
        out.info(f"Policy: {pair.policy.value}")
        if pair.exclude:
            out.info(f"Excluding: {', '.join(pair.exclude)}")
        out.print("")

    try:
        if out.json_output:
            messages = engine.sync_pair(pair)
        else:
            with SyncMessageDisplay(out) as display:
                messages = engine.sync_pair(pair, callback=display.handle)
    except DirSyncNotFoundError as e:
        if not out.json_output:
            out.error(str(e))
        result.update({"messages": [], "summary": {}, "ok": False, "error": str(e)})
        return result

    summary = summarize_messages(messages)
    errors = summary[MessageLevel.ERROR.label]
    result.update(
        {
            "messages": [message.to_dict() for message in messages],
            "summary": summary,
            "ok": errors == 0,
        }
    )

    if not out.json_output:
        out.print("")
        if errors:
            out.warning(f"Sync finished with {errors} error(s)")
        else:
            out.success("Sync complete!")
        out.print_summary("Messages:", summary)

    return result


def _sync_pairs(ctx: Any, out: OutputFormatter, pairs: list[SyncPair]) -> None:
    """Sync every pair in order and exit non-zero if any failed."""
    engine = SyncEngine()
    results = []

    for index, pair in enumerate(pairs):
        if index and not out.quiet and not out.json_output:
            out.print("")
        results.append(_sync_one_pair(out, engine, pair))

    if out.json_output:
        out.output_json(results[0] if len(results) == 1 else results)

    if not all(result["ok"] for result in results):
        ctx.exit(1)


@main.command()
@click.argument("path", type=str)
@click.argument("destination", type=str, required=False)
@click.option(
    "--exclude",
    "-e",
    multiple=True,
    help="Skip paths matching this pattern ('*' matches anything); repeatable",
)
@click.option(
    "--policy",
    "-p",
    type=POLICY_CHOICES,
    envvar="PYDIRSYNC_POLICY",
    default=None,
    help="full: always overwrite; differential: overwrite changed files only",
)
@click.option(
    "--verbosity",
    "-V",
    type=VERBOSITY_CHOICES,
    envvar="PYDIRSYNC_VERBOSITY",
    default="fileio",
    show_default=True,
    help="Minimum level of messages to show",
)
@click.pass_context
def sync(
    ctx: Any,
    path: str,
    destination: Optional[str],
    exclude: tuple[str, ...],
    policy: Optional[str],
    verbosity: str,
) -> None:
    """Make DESTINATION an exact copy of PATH.

    PATH: Source directory (or file), or a literal sync pair in format
          /source:policy:/destination when DESTINATION is omitted

    Examples:
        pydirsync sync ./docs /mnt/backup/docs
        pydirsync sync ./docs /mnt/backup/docs -e "*.tmp" -e "*cache*"
        pydirsync sync ./docs /mnt/backup/docs --policy full
        pydirsync sync /home/user/docs:diff:/mnt/backup/docs
    """
    out: OutputFormatter = ctx.obj["out"]

    if destination is None:
        try:
            pair = SyncPair.parse_literal(path)
        except ValueError as e:
            out.error(f"Invalid sync pair format: {e}")
            ctx.exit(1)
            return  # Unreachable, but helps type checker
        if policy is not None:
            pair.policy = SyncPolicy.from_string(policy)
    else:
        pair = SyncPair(
            source=Path(path),
            destination=Path(destination),
            policy=SyncPolicy.from_string(policy or "differential"),
        )

    pair.exclude.extend(exclude)
    pair.verbosity = MessageLevel.from_string(verbosity)

    _sync_pairs(ctx, out, [pair])


@main.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--alias", "-a", help="Only sync the pair with this alias")
@click.pass_context
def run(ctx: Any, config_file: str, alias: Optional[str]) -> None:
    """Sync every pair defined in a JSON CONFIG_FILE.

    CONFIG_FILE holds a list of objects with "source", "destination" and
    optional "policy", "exclude", "verbosity" and "alias" keys.

    Examples:
        pydirsync run pairs.json
        pydirsync run pairs.json --alias docs
    """
    out: OutputFormatter = ctx.obj["out"]

    try:
        pairs = load_sync_pairs_from_json(config_file)
    except SyncConfigError as e:
        out.error(str(e))
        ctx.exit(1)
        return

    if alias is not None:
        pairs = [pair for pair in pairs if pair.alias == alias]
        if not pairs:
            out.error(f"No sync pair with alias '{alias}' in {config_file}")
            ctx.exit(1)
            return

    if not pairs:
        out.warning(f"No sync pairs defined in {config_file}")
        return

    _sync_pairs(ctx, out, pairs)


@main.command(name="hash")
@click.argument(
    "files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False)
)
@click.option(
    "--algorithm",
    "-a",
    default=DEFAULT_HASH_ALGORITHM,
    show_default=True,
    help="hashlib algorithm name",
)
@click.pass_context
def hash_files(ctx: Any, files: tuple[str, ...], algorithm: str) -> None:
    """Print the content digest of each FILE."""
    out: OutputFormatter = ctx.obj["out"]

    try:
        comparator = ContentComparator(algorithm=algorithm)
    except ValueError as e:
        out.error(f"Unsupported hash algorithm '{algorithm}': {e}")
        ctx.exit(1)
        return

    digests: dict[str, str] = {}
    failed = False
    for file_path in files:
        try:
            digests[file_path] = comparator.hash_file(file_path)
        except DirSyncIOError as e:
            out.error(str(e))
            failed = True

    if out.json_output:
        out.output_json({"algorithm": algorithm, "digests": digests})
    else:
        for file_path, digest in digests.items():
            out.print(f"{digest}  {file_path}")

    if failed:
        ctx.exit(1)


@main.command()
@click.argument("file_a", type=click.Path(exists=True, dir_okay=False))
@click.argument("file_b", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def compare(ctx: Any, file_a: str, file_b: str) -> None:
    """Check whether FILE_A and FILE_B have identical contents.

    Exit code is 0 when identical, 1 when different and 2 when the files
    could not be compared.
    """
    out: OutputFormatter = ctx.obj["out"]

    try:
        equal = ContentComparator().content_equals(file_a, file_b)
    except DirSyncComparisonError as e:
        out.error(f"Cannot compare files: {e}")
        ctx.exit(2)
        return

    if out.json_output:
        out.output_json({"file_a": file_a, "file_b": file_b, "identical": equal})
    elif equal:
        out.success(f"'{file_a}' is binary equal to '{file_b}'")
    else:
        out.warning(f"'{file_a}' and '{file_b}' differ")

    ctx.exit(0 if equal else 1)


if __name__ == "__main__":
    main()
