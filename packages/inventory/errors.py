"""Exceptions raised by the inventory layer."""

from typing import Optional


class InventoryError(Exception):
    """Base class for inventory failures."""


class CredentialsError(InventoryError):
    """Raised when AWS credentials or configuration cannot be loaded."""


class UpstreamError(InventoryError):
    """Raised when an AWS API call fails."""

    def __init__(
        self,
        service: str,
        operation: str,
        message: str,
        error_code: Optional[str] = None,
    ):
        self.service = service
        self.operation = operation
        self.error_code = error_code
        super().__init__(f"{service}.{operation} failed: {message}")


class InvalidPayloadError(InventoryError):
    """Raised when a quota increase body is not a usable JSON object."""


class InvalidFieldsError(InventoryError):
    """Raised when a quota increase body has missing or zero fields."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"Invalid fields: {', '.join(fields)}")
