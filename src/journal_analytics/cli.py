"""CLI entry point for the analytics engine."""

from __future__ import annotations

import json

import click

from .core.config import load_settings


def _engine(config: str | None, snapshot: str):
    from .observability.logger import setup_logging
    from .performance.engine import PerformanceEngine
    from .storage.memory_store import InMemoryPerformanceStore

    settings = load_settings(config_path=config)
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )
    store = InMemoryPerformanceStore.from_snapshot_file(snapshot)
    return PerformanceEngine(store, settings=settings)


@click.group()
def main() -> None:
    """Trading journal performance analytics."""


@main.command()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--snapshot", required=True, type=click.Path(exists=True), help="JSON data snapshot")
@click.option("--user", "user_id", required=True, help="User id to report on")
def report(config: str | None, snapshot: str, user_id: str) -> None:
    """Print the full performance report as JSON."""
    engine = _engine(config, snapshot)
    result = engine.build_report(user_id)
    click.echo(result.model_dump_json(indent=2))


@main.command()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--snapshot", required=True, type=click.Path(exists=True), help="JSON data snapshot")
@click.option("--user", "user_id", required=True, help="User id to evaluate")
def goals(config: str | None, snapshot: str, user_id: str) -> None:
    """Print evaluated goals as JSON."""
    engine = _engine(config, snapshot)
    evaluated = engine.evaluate_goals(user_id)
    click.echo(json.dumps([g.model_dump(mode="json") for g in evaluated], indent=2))


@main.command()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--snapshot", required=True, type=click.Path(exists=True), help="JSON data snapshot")
@click.option("--user", "user_id", required=True, help="User id")
@click.option("--year", required=True, type=int, help="Calendar year")
@click.option("--month", required=True, type=click.IntRange(1, 12), help="Calendar month (1-12)")
def calendar(config: str | None, snapshot: str, user_id: str, year: int, month: int) -> None:
    """Print one calendar month as JSON."""
    engine = _engine(config, snapshot)
    click.echo(engine.calendar_month(user_id, year, month).model_dump_json(indent=2))


if __name__ == "__main__":
    main()
