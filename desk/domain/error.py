"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (length or format constraints)."""

    pass


class InvalidReferenceError(ValidationError):
    """Raised when a request refers to a state or tag that does not exist."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"Invalid {resource} reference: {identifier}")


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotAuthenticatedError(DomainError):
    """Raised when an operation requires a signed-in user."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotAuthorizedError(DomainError):
    """Raised when the user's role does not allow an operation."""

    def __init__(self, action: str, user_id: str):
        self.action = action
        self.user_id = user_id
        super().__init__(f"User {user_id} is not authorized to {action}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class MaterialLockedError(DomainError):
    """Raised when another editor currently holds a material."""

    def __init__(self, material_id: str, holder: str):
        self.material_id = material_id
        self.holder = holder
        super().__init__(f"Material {material_id} is being edited by {holder}")


class SubmissionFailedError(DomainError):
    """Raised when an analysis submission fails part-way through its writes."""

    def __init__(self, material_id: str, failed_step: str, completed_steps: list[str]):
        self.material_id = material_id
        self.failed_step = failed_step
        self.completed_steps = completed_steps
        super().__init__(
            f"Analysis submission for material {material_id} failed at "
            f"'{failed_step}' after {completed_steps or 'no steps'}"
        )


class PresenceUnavailableError(DomainError):
    """Raised when the presence channel cannot be reached."""

    pass
