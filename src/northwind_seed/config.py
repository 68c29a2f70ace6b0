"""
Configuration management for northwind-seed.

Loads configuration from northwind-seed.toml files using Pydantic. Values
missing from the file are read from the environment (TURSO_URL, TURSO_TOKEN,
NORTHWIND_PROFILE, ...), then fall back to defaults.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from northwind_seed.retry import RetryPolicy

CONFIG_FILENAME = "northwind-seed.toml"


class BackendConfig(BaseSettings):
    """Persistence backend configuration (env prefix TURSO_)."""

    model_config = SettingsConfigDict(env_prefix="TURSO_", env_file=".env", extra="ignore")

    kind: Literal["http", "postgres", "staging"] = Field(
        default="http", description="Backend implementation"
    )
    url: str = Field(
        default="http://localhost:8000", description="sqlite-proxy base URL (TURSO_URL)"
    )
    token: Optional[str] = Field(default=None, description="Bearer token (TURSO_TOKEN)")
    database_url: str = Field(
        default="postgresql://localhost/northwind",
        description="PostgreSQL connection URL for the postgres backend",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(default=3, ge=0, description="Retries for transient failures")
    retry_delay: float = Field(default=0.5, ge=0, description="Initial retry delay (s)")
    backoff_factor: float = Field(default=2.0, ge=1, description="Delay multiplier")

    def to_retry_policy(self) -> RetryPolicy:
        """Convert to RetryPolicy instance."""
        return RetryPolicy(
            max_retries=self.max_retries,
            retry_delay=self.retry_delay,
            backoff_factor=self.backoff_factor,
        )


class SeedSettings(BaseSettings):
    """Seeding run configuration (env prefix NORTHWIND_)."""

    model_config = SettingsConfigDict(env_prefix="NORTHWIND_", env_file=".env", extra="ignore")

    profile: str = Field(default="nano", description="Size profile name")
    batch_size: int = Field(default=5, ge=1, description="Flush when buffer exceeds this")
    seed: Optional[int] = Field(default=None, description="Random seed (unset = random)")
    locale: str = Field(default="en_US", description="Faker locale")
    migrate: bool = Field(default=True, description="Apply migrations before seeding")
    migrations_dir: Optional[str] = Field(
        default=None,
        description="Directory of *.sql migrations (unset = built-in schema)",
    )


class Config(BaseSettings):
    """Main configuration for northwind-seed."""

    backend: BackendConfig = Field(default_factory=BackendConfig)
    seed: SeedSettings = Field(default_factory=SeedSettings)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to northwind-seed.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        # Build sections through their constructors so the environment fills
        # any key the file leaves out
        return cls(
            backend=BackendConfig(**data.get("backend", {})),
            seed=SeedSettings(**data.get("seed", {})),
        )

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from northwind-seed.toml.

        Searches for northwind-seed.toml starting from start_dir and walking up
        parent directories until found or reaching filesystem root.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        # Walk up directory tree
        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories. "
            f"Run 'northwind-seed init' to create one."
        )

    @classmethod
    def load(cls, path: Optional[Path | str] = None) -> Config:
        """Load from an explicit path, a discovered file, or the environment alone."""
        if path is not None:
            return cls.from_toml(path)
        try:
            return cls.find_and_load()
        except FileNotFoundError:
            return cls()

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        The token is never written; keep it in TURSO_TOKEN.

        Args:
            path: Path to write northwind-seed.toml
        """
        config_path = Path(path)

        seed_line = f"seed = {self.seed.seed}" if self.seed.seed is not None else "# seed = 42"
        migrations_line = (
            f'migrations_dir = "{self.seed.migrations_dir}"'
            if self.seed.migrations_dir
            else '# migrations_dir = "drizzle"'
        )

        toml_content = f"""# northwind-seed configuration
# TURSO_URL / TURSO_TOKEN and NORTHWIND_* environment variables fill unset keys.

[backend]
kind = "{self.backend.kind}"
url = "{self.backend.url}"
database_url = "{self.backend.database_url}"
timeout = {self.backend.timeout}
max_retries = {self.backend.max_retries}
retry_delay = {self.backend.retry_delay}
backoff_factor = {self.backend.backoff_factor}

[seed]
profile = "{self.seed.profile}"
batch_size = {self.seed.batch_size}
locale = "{self.seed.locale}"
migrate = {str(self.seed.migrate).lower()}
{seed_line}
{migrations_line}
"""

        config_path.write_text(toml_content)
