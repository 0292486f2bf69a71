from .setup import (
    CorrelationIdFilter,
    bind_correlation_id,
    configure_logging,
    current_correlation_id,
    get_logger,
    reset_correlation_id,
)

__all__ = [
    "CorrelationIdFilter",
    "bind_correlation_id",
    "configure_logging",
    "current_correlation_id",
    "get_logger",
    "reset_correlation_id",
]
