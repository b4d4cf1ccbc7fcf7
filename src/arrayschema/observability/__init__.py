"""Public observability primitives: structured logging and correlation scopes."""

from arrayschema.observability.logging import (
    LoggingConfig,
    LoggingHandle,
    correlation_scope,
    get_active_logging_handle,
    get_correlation_context,
    reset_correlation_fields,
    set_correlation_fields,
    setup_logging,
    setup_logging_from_settings,
    shutdown_logging,
)

__all__ = [
    "LoggingConfig",
    "LoggingHandle",
    "correlation_scope",
    "get_active_logging_handle",
    "get_correlation_context",
    "reset_correlation_fields",
    "set_correlation_fields",
    "setup_logging",
    "setup_logging_from_settings",
    "shutdown_logging",
]
