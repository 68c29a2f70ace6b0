"""CLI commands for northwind-seed."""

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from northwind_seed.backends import DirectBackend, HttpProxyBackend, StagingBackend
from northwind_seed.backends.base import SeedBackend
from northwind_seed.config import CONFIG_FILENAME, BackendConfig, Config
from northwind_seed.exceptions import NorthwindSeedError
from northwind_seed.migrations import load_migration_files, schema_statements
from northwind_seed.orchestrator import SeedOrchestrator
from northwind_seed.profiles import SIZE_PROFILES, get_profile
from northwind_seed.sampling import RandomSource

logger = logging.getLogger("northwind_seed.cli")


def create_backend(config: BackendConfig) -> SeedBackend:
    """Build the backend selected by ``config.kind``."""
    if config.kind == "staging":
        return StagingBackend()
    if config.kind == "postgres":
        return DirectBackend.connect(config.database_url)
    return HttpProxyBackend(config.url, token=config.token, timeout=config.timeout)


@click.group()
@click.version_option(package_name="northwind-seed")
@click.option("--verbose", "-v", is_flag=True, help="Log every flush (DEBUG)")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
def cli(verbose: bool, quiet: bool) -> None:
    """northwind-seed - generate and load a consistent Northwind sample dataset."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help=f"Path to {CONFIG_FILENAME} (default: search upward from cwd)",
)
@click.option("--profile", help="Size profile name (e.g. nano, micro)")
@click.option("--seed", "random_seed", type=int, help="Random seed for a reproducible run")
@click.option("--batch-size", type=click.IntRange(min=1), help="Flush threshold per table")
@click.option(
    "--backend",
    "backend_kind",
    type=click.Choice(["http", "postgres", "staging"]),
    help="Persistence backend",
)
@click.option(
    "--migrations-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of *.sql migrations (default: built-in schema)",
)
@click.option("--no-migrate", is_flag=True, help="Skip migrations")
@click.option("--json", "output_json", is_flag=True, help="Print the summary as JSON")
def seed(
    config_path: Path | None,
    profile: str | None,
    random_seed: int | None,
    batch_size: int | None,
    backend_kind: str | None,
    migrations_dir: Path | None,
    no_migrate: bool,
    output_json: bool,
) -> None:
    """Generate every table and write it to the backend."""
    try:
        config = Config.load(config_path)
        settings = config.seed
        if profile is not None:
            settings.profile = profile
        if random_seed is not None:
            settings.seed = random_seed
        if batch_size is not None:
            settings.batch_size = batch_size
        if migrations_dir is not None:
            settings.migrations_dir = str(migrations_dir)
        if no_migrate:
            settings.migrate = False
        if backend_kind is not None:
            config.backend.kind = backend_kind

        size_profile = get_profile(settings.profile)

        migrations = None
        if settings.migrate:
            if settings.migrations_dir:
                migrations = load_migration_files(settings.migrations_dir)
            else:
                migrations = schema_statements()

        backend = create_backend(config.backend)
        try:
            orchestrator = SeedOrchestrator(
                backend,
                size_profile,
                batch_size=settings.batch_size,
                random_source=RandomSource(seed=settings.seed, locale=settings.locale),
                retry_policy=config.backend.to_retry_policy(),
                migrations=migrations,
            )
            summary = orchestrator.run()
        finally:
            backend.close()

    except (NorthwindSeedError, FileNotFoundError, ValidationError) as e:
        logger.error(f"FATAL ERROR: {e}")
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(summary.as_dict(), indent=2))
        return

    click.echo(f"Seeded profile '{settings.profile}' in {summary.elapsed:.1f}s")
    for table, rows in summary.rows.items():
        click.echo(f"  {table:<14} {rows:>8} rows  {summary.flushes[table]:>6} flushes")
    click.echo(f"  {'total':<14} {summary.total_rows:>8} rows")


@cli.command()
def profiles() -> None:
    """List size profiles and their target counts."""
    for name, size in SIZE_PROFILES.items():
        counts = ", ".join(f"{table}={count}" for table, count in size.model_dump().items())
        click.echo(f"{name}: {counts}")


@cli.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path(CONFIG_FILENAME),
    show_default=True,
    help="Where to write the config file",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: Path, force: bool) -> None:
    """Write a default configuration file."""
    if path.exists() and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    Config().to_toml(path)
    click.echo(f"✓ Wrote {path}")


@cli.command()
def schema() -> None:
    """Print the DDL applied by the built-in migration."""
    for statement in schema_statements():
        click.echo(f"{statement};\n")


if __name__ == "__main__":
    cli()
