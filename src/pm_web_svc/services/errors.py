"""Exceptions raised by the service layer.

Routes translate these into HTTP responses: ValidationError maps to 400,
NotFoundError to 404 and StoreError to 500.
"""


class ServiceError(Exception):
    """Base exception for all service-layer failures."""
    pass


class ValidationError(ServiceError, ValueError):
    """Exception raised when input is missing or violates a business rule."""
    pass


class NotFoundError(ServiceError, LookupError):
    """Exception raised when a referenced record does not exist."""

    def __init__(self, entity: str, record_id):
        super().__init__(f"{entity} with ID {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class StoreError(ServiceError):
    """Exception raised when a query or transaction against the database fails."""
    pass
