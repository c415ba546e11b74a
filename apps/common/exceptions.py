"""
Failure kinds shared by every service layer.

Services raise subclasses of these; the HTTP boundary maps each kind
to a status code (see exception_handler.py). Every error carries a
human-readable message built from the resource kind and identifiers.
"""


class ServiceError(Exception):
    """Base exception for all service errors."""

    kind = 'service_error'

    def __init__(self, message: str = ''):
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """Referenced entity or relation row does not exist."""

    kind = 'not_found'

    def __init__(self, resource: str, identifier=None):
        self.resource = resource
        self.identifier = identifier
        message = f"{resource} not found"
        if identifier is not None:
            message += f" with id '{identifier}'"
        super().__init__(message)


class ConflictError(ServiceError):
    """Operation would create a second row for a unique relation."""

    kind = 'conflict'


class DuplicateResourceError(ConflictError):
    """A resource with the same unique field value already exists."""

    def __init__(self, resource: str, field: str, value):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"A {resource} with {field} '{value}' already exists")


class BusinessRuleError(ServiceError):
    """A state-dependent rule blocks the transition."""

    kind = 'business_rule'


class PermissionDeniedError(ServiceError):
    """Actor lacks the required role, authority or identity relationship."""

    kind = 'permission_denied'

    def __init__(self, action: str, resource: str, identifier=None):
        self.action = action
        self.resource = resource
        self.identifier = identifier
        message = f"Not allowed to {action} {resource}"
        if identifier is not None:
            message += f" '{identifier}'"
        super().__init__(message)


class SelfActionError(ServiceError):
    """Actor and target of an other-directed action coincide."""

    kind = 'self_action'
