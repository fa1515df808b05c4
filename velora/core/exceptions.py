class VeloraException(Exception):
    """Base exception for the billing service"""

    pass


class UnauthorizedException(VeloraException):
    """Raised when JWT validation, login or tenant resolution fails"""

    pass


class NotFoundException(VeloraException):
    """Raised when resource not found"""

    pass


class ForbiddenException(VeloraException):
    """Raised when a token of the wrong kind hits an endpoint"""

    pass


class ValidationException(VeloraException):
    """Raised for business logic validation errors"""

    pass


class ConflictException(VeloraException):
    """Raised when a unique value (email, item code) already exists"""

    pass


class InvalidTenantNameError(ValidationException):
    """Raised when a tenant database name fails the identifier allow-list"""

    pass


class ProvisioningError(VeloraException):
    """
    Raised when a tenant database could not be brought into existence.

    The driver error is always chained as __cause__.
    """

    def __init__(self, message: str, db_name: str):
        super().__init__(message)
        self.db_name = db_name
