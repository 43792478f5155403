"""elasticurator 命令行入口."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from elasticurator.config import ConfigurationError, load_config
from elasticurator.curator import Curator
from elasticurator.exceptions import CuratorError
from elasticurator.policies import build_policy_set, classify_indices

app = typer.Typer(
    name="elasticurator",
    help="Close and delete time-partitioned Elasticsearch indices by age.",
    no_args_is_help=True,
)

ConfigArgument = Annotated[Path, typer.Argument(help="YAML configuration file")]
NowOption = Annotated[
    Optional[str],
    typer.Option("--now", help="Reference instant (ISO 8601), defaults to the current time"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", "-l", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _parse_now(now: str | None) -> datetime | None:
    if now is None:
        return None
    try:
        return datetime.fromisoformat(now)
    except ValueError:
        typer.echo(f"Error: invalid --now value: {now}", err=True)
        raise typer.Exit(1)


def _load(config_file: Path):
    try:
        return load_config(config_file)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def check(
    config_file: ConfigArgument,
    now: NowOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Validate the policies of a configuration file."""
    _setup_logging(log_level)
    config = _load(config_file)
    policy_set = build_policy_set(config.policies, reference_instant=_parse_now(now))

    for policy in policy_set:
        typer.echo(f"[{policy.name}] {policy.template}")
        typer.echo(f"    close after:  {policy.close_period}")
        typer.echo(f"    delete after: {policy.delete_period}")
        typer.echo(f"    date format:  {policy.date_format.pattern}")
        typer.echo(f"    name pattern: {policy.name_pattern.pattern}")
    for rejected in policy_set.rejected:
        typer.echo(f"[{rejected.name}] REJECTED ({rejected.error_type}): {rejected.reason}")

    if policy_set.smallest_period is not None:
        typer.echo(f"Smallest period: {policy_set.smallest_period}")
    typer.echo(
        f"Initial delay: {config.initial_delay_period}, repeat delay: {config.repeat_delay_period}"
    )
    if policy_set.rejected:
        raise typer.Exit(1)


@app.command()
def plan(
    config_file: ConfigArgument,
    now: NowOption = None,
    output_json: Annotated[bool, typer.Option("--json", help="Print JSON")] = False,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Show what a cleanup cycle would do, without acting."""
    _setup_logging(log_level)
    config = _load(config_file)
    try:
        curator = Curator(config)
        names = curator.index_manager.list_index_names()
    except CuratorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    classifications = classify_indices(curator.policy_set, names, _parse_now(now))
    if output_json:
        rows = [
            {
                "index": item.index_name,
                "policy": item.policy_name,
                "action": item.action.value,
                "timestamp": item.timestamp.isoformat(),
            }
            for item in classifications
        ]
        typer.echo(json.dumps(rows, indent=2))
        return
    for item in classifications:
        typer.echo(f"{item.action.value:<7} {item.index_name}  ({item.policy_name})")


@app.command()
def run(
    config_file: ConfigArgument,
    once: Annotated[bool, typer.Option("--once", help="Run a single cleanup cycle and exit")] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Only report, never close or delete")
    ] = False,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Run the cleanup scheduler until interrupted."""
    _setup_logging(log_level)
    config = _load(config_file)
    if dry_run:
        config.dry_run = True

    try:
        curator = Curator(config)
    except CuratorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if once:
        try:
            result = curator.run_once()
        except CuratorError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        if not result.success:
            raise typer.Exit(1)
        return

    curator.start()
    try:
        curator.scheduler.wait()
    except KeyboardInterrupt:
        pass
    finally:
        curator.stop()


if __name__ == "__main__":
    app()
