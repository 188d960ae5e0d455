"""response_translate exception hierarchy.

Only wiring and configuration code raises these. Translation itself never
surfaces an error to the caller: failures degrade to fallback or raw values.
"""

from __future__ import annotations


class ResponseTranslateError(Exception):
    """Base exception for all response_translate errors."""


# --- Registry ---


class RegistryError(ResponseTranslateError):
    """Base for resolver registry errors."""


class DuplicateResolverError(RegistryError):
    """Raised when a second resolver is registered for the same strategy."""

    def __init__(self, strategy: str, existing: str, incoming: str) -> None:
        self.strategy = strategy
        super().__init__(
            f"Duplicate resolver for strategy '{strategy}': {existing} and {incoming}"
        )


# --- Configuration ---


class ConfigurationError(ResponseTranslateError):
    """Base for descriptor and collaborator configuration errors."""


class IdentifierValidationError(ConfigurationError):
    """Raised when a table or column identifier fails validation."""

    def __init__(self, kind: str, identifier: object) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Unsafe {kind} identifier: {identifier!r}")


# --- Adapter ---


class AdapterError(ResponseTranslateError):
    """Base for database adapter errors."""
