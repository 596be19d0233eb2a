"""Custom exception hierarchy for estate-catalog."""


class CatalogError(Exception):
    """Base exception for all estate-catalog errors."""


class InvalidEntityStateError(CatalogError):
    """Raised when an entity is in an invalid state for the operation."""


class ValidationError(CatalogError):
    """Raised when submitted data fails validation."""


class RepositoryError(CatalogError):
    """Raised when a persistence back-end call fails."""


class ConfigurationError(CatalogError):
    """Raised when configuration is invalid or missing."""


class PublisherError(CatalogError):
    """Raised when an activity publish operation fails."""
