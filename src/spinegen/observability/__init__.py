"""Public observability primitives: structured logging."""

from spinegen.observability.logging import (
    configure_logging,
    configure_logging_from_settings,
    generation_scope,
    reset_logging,
)

__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "generation_scope",
    "reset_logging",
]
