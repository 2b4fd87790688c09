"""Custom exceptions for the Collab Engine.

Degenerate ranking input (missing tags, buckets or creators) is never an
error; these exceptions cover data access, configuration and wiring.
"""

from __future__ import annotations


class CollabEngineError(Exception):
    """Base exception for all engine errors."""

    pass


class DataAccessError(CollabEngineError):
    """Raised when the external data store cannot serve a request."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Data store request failed during {operation}: {detail}")


class AuthenticationError(DataAccessError):
    """Raised when the data store rejects the configured API key (401/403)."""

    def __init__(self, operation: str, status_code: int, detail: str) -> None:
        self.status_code = status_code
        super().__init__(
            operation,
            f"authentication rejected (status={status_code}). "
            f"Check SUPABASE_KEY is correct and has access to this table. {detail}".rstrip(),
        )


class DataStoreNotConfiguredError(CollabEngineError):
    """Raised when the selected data source is missing required settings."""

    def __init__(self, source: str, missing: tuple[str, ...]) -> None:
        self.source = source
        self.missing = missing
        names = ", ".join(missing)
        super().__init__(f"Data source '{source}' is not configured. Set: {names}.")


class ConfigFileNotFoundError(CollabEngineError):
    """Raised when an engine config file path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(CollabEngineError):
    """Raised when an engine config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(CollabEngineError):
    """Raised when an engine config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is invalid: {detail}")


class RankingWeightsFileNotFoundError(CollabEngineError):
    """Raised when a ranking weights file path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Ranking weights file not found: {path}")


class RankingWeightsValidationError(CollabEngineError):
    """Raised when a ranking weights file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Ranking weights file {path} is invalid: {detail}")


class InvalidRankingWeightsError(CollabEngineError):
    """Raised when ranking weights do not describe a 100-point scale."""

    def __init__(self, total: int) -> None:
        self.total = total
        super().__init__(
            f"Ranking weights must be non-negative and sum to 100 (got total={total})."
        )
