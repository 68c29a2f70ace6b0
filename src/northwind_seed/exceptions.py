"""Custom exceptions with helpful error messages."""


class NorthwindSeedError(Exception):
    """Base exception for northwind-seed errors."""

    pass


class InvalidRangeError(NorthwindSeedError):
    """Integer range is empty (low > high) or choice pool is empty."""

    def __init__(self, low: int, high: int):
        self.low = low
        self.high = high
        super().__init__(
            f"Invalid range [{low}, {high}]: lower bound is greater than upper bound.\n\n"
            f"Suggestions:\n"
            f"1. Check the size profile counts (every count must be >= 1)\n"
            f"2. Swap the bounds if they were passed in the wrong order"
        )


class NoBucketMatchedError(NorthwindSeedError):
    """Weighted sampler configuration can never select a bucket."""

    def __init__(self, reason: str):
        super().__init__(
            f"Weighted sampler cannot select a bucket: {reason}.\n\n"
            f"Suggestions:\n"
            f"1. Provide at least one bucket with a positive weight\n"
            f"2. Weights must be non-negative\n"
            f"3. Bucket value lists must not be empty"
        )


class RegistryPreconditionError(NorthwindSeedError):
    """A generator needed reference data that has not been generated yet."""

    def __init__(self, entry: str, consumer: str):
        self.entry = entry
        self.consumer = consumer
        super().__init__(
            f"Reference data '{entry}' is not available for '{consumer}'.\n\n"
            f"Suggestions:\n"
            f"1. Ensure the producing table is seeded before '{consumer}'\n"
            f"2. Check the orchestrator phase order\n"
            f"3. Check that the producing table has a non-zero count in the profile"
        )


class BackendError(NorthwindSeedError):
    """Persistence backend failed a statement or batch."""

    pass


class BackendUnavailableError(BackendError):
    """Backend could not be reached or failed transiently (retryable)."""

    def __init__(self, target: str, detail: str):
        self.target = target
        self.detail = detail
        super().__init__(
            f"Backend at '{target}' is unavailable: {detail}\n\n"
            f"Suggestions:\n"
            f"1. Check that the database or proxy server is running\n"
            f"2. Check network connectivity and the configured URL\n"
            f"3. Increase max_retries / retry_delay in northwind-seed.toml"
        )


class BackendRejectedError(BackendError):
    """Backend rejected a statement (not retryable)."""

    def __init__(self, target: str, detail: str, sql: str | None = None):
        self.target = target
        self.detail = detail
        self.sql = sql
        statement = f"\nStatement: {sql[:200]}" if sql else ""
        super().__init__(
            f"Backend at '{target}' rejected the request: {detail}{statement}\n\n"
            f"Suggestions:\n"
            f"1. Run migrations before seeding (omit --no-migrate)\n"
            f"2. Check the access token (TURSO_TOKEN)\n"
            f"3. Drop leftover rows from a previous run; ids are assigned from 1"
        )


class BackendOutcomeUnknownError(BackendError):
    """Request was sent but no response arrived; it may have been applied (not retryable)."""

    def __init__(self, target: str, detail: str, sql: str | None = None):
        self.target = target
        self.detail = detail
        self.sql = sql
        super().__init__(
            f"No response from '{target}' after the request was sent: {detail}\n"
            f"The statement may or may not have been applied, so it was not retried.\n\n"
            f"Suggestions:\n"
            f"1. Increase the request timeout (TURSO_TIMEOUT)\n"
            f"2. Check the target tables before re-running; ids are assigned from 1\n"
            f"3. Re-run the seed into an empty database"
        )


class MigrationFailedError(NorthwindSeedError):
    """Migration statements could not be applied."""

    def __init__(self, detail: str):
        super().__init__(
            f"Migrations could not be applied: {detail}\n\n"
            f"Suggestions:\n"
            f"1. Inspect the generated DDL: northwind-seed schema\n"
            f"2. Check the migrations directory for invalid SQL\n"
            f"3. Seeding was not started; no rows were written"
        )


class UnknownProfileError(NorthwindSeedError):
    """Size profile name is not defined."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        super().__init__(
            f"Unknown size profile '{name}'. "
            f"Available: {', '.join(sorted(available))}.\n\n"
            f"Suggestions:\n"
            f"1. List profiles: northwind-seed profiles\n"
            f"2. Set NORTHWIND_PROFILE or [seed].profile in northwind-seed.toml"
        )


class CircularDependencyError(NorthwindSeedError):
    """Circular dependency detected in table relationships."""

    def __init__(self, tables: set[str]):
        tables_str = ", ".join(sorted(tables))
        super().__init__(
            f"Circular dependency detected involving tables: {tables_str}\n\n"
            f"Suggestions:\n"
            f"1. Check foreign key relationships for cycles\n"
            f"2. Self-references are allowed only on nullable columns"
        )


class MissingDependencyError(NorthwindSeedError):
    """Table is seeded before a table it depends on."""

    def __init__(self, table: str, dependency: str):
        super().__init__(
            f"Table '{table}' depends on '{dependency}', "
            f"but '{dependency}' is not seeded before it.\n\n"
            f"Suggestions:\n"
            f"1. Move '{dependency}' earlier in the phase order\n"
            f"2. Add '{dependency}' to the phase list if it is missing"
        )
