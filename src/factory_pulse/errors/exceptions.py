"""Custom exception classes for the Factory Pulse API."""


class FactoryPulseError(Exception):
    """Base exception for Factory Pulse."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(FactoryPulseError):
    """Request or input validation failure."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class InvalidStageError(ValidationError):
    """A stage identifier outside the fixed workflow ordering."""

    def __init__(self, stage, valid_stages: list[str]):
        self.stage = stage
        super().__init__(
            f"Unknown workflow stage '{stage}'",
            details={"stage": str(stage), "valid_stages": valid_stages},
        )


class NotFoundError(FactoryPulseError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class ApprovalRequiredError(FactoryPulseError):
    """Transition needs a management or procurement-owner role."""

    def __init__(self, message: str, details=None):
        super().__init__("APPROVAL_REQUIRED", message, details, status_code=403)


class ConflictError(FactoryPulseError):
    """Resource state conflict."""

    def __init__(self, message: str, details=None):
        super().__init__("CONFLICT", message, details, status_code=409)


class WorkflowBlockedError(FactoryPulseError):
    """Transition rejected by the workflow validator."""

    def __init__(self, message: str, details=None):
        super().__init__("WORKFLOW_BLOCKED", message, details, status_code=422)
