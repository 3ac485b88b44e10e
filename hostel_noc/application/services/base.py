"""Base service logging mixin.

Provides the _log_operation() pattern used by every workflow service:
a logger bound once with the service name and component, then bound per
operation with the operation name and the ids involved. The request
correlation id is merged in by the structlog configuration.

Usage:
    class MyService(LoggingMixin):
        def __init__(self, dependency: SomePort) -> None:
            self._dependency = dependency
            self._init_logger(component="noc")

        async def do_something(self, request_id: UUID) -> None:
            log = self._log_operation("do_something", request_id=str(request_id))
            log.info("operation_started")
"""

import structlog


class LoggingMixin:
    """Mixin providing structured logging for services.

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "noc") -> None:
        """Initialize the logger with service name binding.

        Should be called in __init__ after setting up dependencies.

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
        """Create an operation-scoped logger.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation context.
        """
        return self._log.bind(operation=operation, **context)
