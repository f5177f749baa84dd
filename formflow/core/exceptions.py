"""Custom exceptions for form flow errors"""

from typing import Any, Dict, Optional


class FormFlowError(Exception):
    """Base exception for all form flow errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


# Configuration Errors
class ConfigurationError(FormFlowError):
    """Raised when a flow definition is unusable"""

    pass


class InvalidStepCollectionError(ConfigurationError):
    """Raised when step numbers are not contiguous from 1"""

    pass


class EmptyCollectionError(ConfigurationError):
    """Raised when first/last step is requested from an empty collection"""

    pass


# Lookup Errors
class NotFoundError(FormFlowError):
    """Raised when a requested item does not exist"""

    pass


class StepNotFoundError(NotFoundError):
    """Raised when a step number is outside the collection"""

    def __init__(self, number: int, count: int):
        super().__init__(
            message=f"Step {number} does not exist, the flow has {count} step(s).",
            details={"step_number": number, "step_count": count},
        )


class FlowNotFoundError(NotFoundError):
    """Raised when no flow definition is registered under a name"""

    pass


# Usage Errors
class TransitionError(FormFlowError):
    """Raised when a transition is requested that can not be performed"""

    def __init__(
        self,
        message: str,
        flow_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.flow_name = flow_name
        super().__init__(message, details)


class LogicError(FormFlowError):
    """Raised when a flow is used outside its lifecycle (e.g. before start)"""

    pass


# Persistence Errors
class StorageError(FormFlowError):
    """Raised when the flow context can not be loaded or saved"""

    pass
