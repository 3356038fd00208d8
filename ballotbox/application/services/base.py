"""Base service logging mixin.

Gives every application service the same structured logging shape.

Usage:
    from ballotbox.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self) -> None:
            self._init_logger()

        def do_something(self) -> None:
            log = self._log_operation("do_something", item_id="123")
            log.info("operation_started")
"""

import structlog

from ballotbox.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with the service class name and a component.
    Each operation additionally binds its name, the correlation ID from
    context, and any extra context passed to _log_operation().

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "election") -> None:
        """Initialize the logger with service name binding.

        Args:
            component: The component type for log categorization.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create operation-scoped logger with correlation ID.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and correlation context.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
