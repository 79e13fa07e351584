"""Custom exceptions for the workflow simulator with detailed error information."""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for categorizing exceptions."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for better classification."""
    VALIDATION = "validation"
    INPUT = "input"
    EXECUTION = "execution"
    NETWORK = "network"
    CONFIGURATION = "configuration"
    RESOURCE = "resource"


class WorkflowEngineError(Exception):
    """Base exception for all workflow simulator errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.EXECUTION,
        details: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.severity = severity
        self.category = category
        self.details = details or {}
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging and API responses."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "details": self.details,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "exception_type": self.__class__.__name__
        }

    def add_context(self, **kwargs):
        """Add additional context to the exception."""
        self.context.update(kwargs)
        return self

    def add_details(self, **kwargs):
        """Add additional details to the exception."""
        self.details.update(kwargs)
        return self


class WorkflowPayloadError(WorkflowEngineError):
    """Raised when a payload is not a well-formed workflow graph at all."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.INPUT,
            **kwargs
        )
        if field:
            self.add_context(field=field)


class AutomationCatalogError(WorkflowEngineError):
    """Raised when automation catalog operations fail."""

    def __init__(
        self,
        message: str,
        action_id: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            severity=ErrorSeverity.MEDIUM,
            category=ErrorCategory.CONFIGURATION,
            **kwargs
        )
        if action_id:
            self.add_context(action_id=action_id)
        if operation:
            self.add_context(operation=operation)


class AutomationNotFoundError(AutomationCatalogError):
    """Raised when an automation action id is not in the catalog."""

    def __init__(self, action_id: str, **kwargs):
        super().__init__(
            f"Automation action '{action_id}' not found",
            action_id=action_id,
            operation="lookup",
            **kwargs
        )


class SimulationTimeoutError(WorkflowEngineError):
    """Raised when a simulation exceeds the transport timeout."""

    def __init__(self, message: str, timeout: Optional[float] = None, **kwargs):
        super().__init__(
            message,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.RESOURCE,
            **kwargs
        )
        if timeout is not None:
            self.add_details(timeout=timeout)


class ConfigurationError(WorkflowEngineError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.CONFIGURATION,
            **kwargs
        )
        if config_key:
            self.add_context(config_key=config_key)


class APIError(WorkflowEngineError):
    """Raised when a call to the simulator API fails."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        endpoint: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            severity=ErrorSeverity.MEDIUM,
            category=ErrorCategory.NETWORK,
            **kwargs
        )
        self.status_code = status_code
        if endpoint:
            self.add_context(endpoint=endpoint)
        self.add_details(status_code=status_code)


def create_error_response(error: WorkflowEngineError) -> Dict[str, Any]:
    """Create a standardized error response from a WorkflowEngineError."""
    return {
        "error": error.error_code,
        "message": error.message,
        "details": {
            **error.details,
            "severity": error.severity.value,
            "category": error.category.value,
            "timestamp": error.timestamp.isoformat()
        },
        "context": error.context
    }
