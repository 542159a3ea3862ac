"""Error aggregation and reporting utilities."""

import logging
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime

from clubportal.config.types import ErrorAggregationConfig

@dataclass
class ErrorGroup:
    """Group of similar errors."""
    message: str
    count: int = 0
    first_seen: datetime = field(default_factory=datetime.now)
    last_seen: datetime = field(default_factory=datetime.now)
    services: set[str] = field(default_factory=set)
    operations: set[str] = field(default_factory=set)

    def update(self, service: str, operation: str | None = None) -> None:
        """Update error group with new occurrence."""
        self.count += 1
        self.last_seen = datetime.now()
        self.services.add(service)
        if operation:
            self.operations.add(operation)

class ErrorAggregator:
    """Aggregates rejected actions and reports repeated ones.

    Groups are keyed by the fields named in ``categorize_by``. A group is
    reported once it reaches ``error_threshold`` occurrences, and whatever is
    left is reported on shutdown.
    """

    def __init__(self, config: ErrorAggregationConfig):
        self._errors: dict[tuple[str, ...], ErrorGroup] = {}
        self._config = config
        self.logger = logging.getLogger('error_aggregator')

    @property
    def pending(self) -> dict[tuple[str, ...], ErrorGroup]:
        """Groups that have not been reported yet."""
        return self._errors

    def _group_key(self, message: str, service: str, operation: str | None) -> tuple[str, ...]:
        values = {'message': message, 'service': service, 'operation': operation or ''}
        return tuple(values[name] for name in self._config.categorize_by if name in values)

    def add_error(
        self,
        message: str,
        service: str,
        operation: str | None = None
    ) -> None:
        """Add error occurrence to aggregator.

        Args:
            message: Error message
            service: Service where error occurred
            operation: Operation that failed
        """
        if not self._config.enabled:
            return

        key = self._group_key(message, service, operation)
        if key not in self._errors:
            self._errors[key] = ErrorGroup(message=message)
        error_group = self._errors[key]
        error_group.update(service, operation)

        if error_group.count >= self._config.error_threshold:
            self._report_error_group(error_group)
            del self._errors[key]

    def _report_error_group(self, error_group: ErrorGroup) -> None:
        """Report a single error group."""
        self.logger.warning(
            f"{error_group.message} (repeated {error_group.count} times)",
            extra={"extra_fields": {
                "error_count": error_group.count,
                "services": sorted(error_group.services),
                "operations": sorted(error_group.operations),
                "first_seen": error_group.first_seen.isoformat(),
            }}
        )

    def shutdown(self) -> None:
        """Report remaining errors."""
        if not self._config.enabled:
            return

        for group in self._errors.values():
            self._report_error_group(group)
        self._errors.clear()

# Global error aggregator instance
_error_aggregator: ErrorAggregator | None = None

def init_error_aggregator(config: ErrorAggregationConfig) -> ErrorAggregator:
    """Initialize global error aggregator with configuration.

    Args:
        config: Error aggregation configuration
    """
    global _error_aggregator
    _error_aggregator = ErrorAggregator(config)
    return _error_aggregator

def get_error_aggregator() -> ErrorAggregator:
    """Get global error aggregator instance, creating a default one if needed."""
    global _error_aggregator
    if _error_aggregator is None:
        _error_aggregator = ErrorAggregator(ErrorAggregationConfig())
    return _error_aggregator

def aggregate_error(
    message: str,
    service: str,
    operation: str | None = None
) -> None:
    """Add error to global aggregator.

    Args:
        message: Error message
        service: Service where error occurred
        operation: Operation that failed
    """
    get_error_aggregator().add_error(message, service, operation)
