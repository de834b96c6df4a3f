"""Exception hierarchy for tenantorders."""


class TenantOrdersError(Exception):
    """Base exception for all tenantorders errors."""

    kind = "error"


class ValidationError(TenantOrdersError):
    """Raised when caller input is malformed. Never reaches the store."""

    kind = "validation_error"


class OrderNotFoundError(TenantOrdersError):
    """Raised when the referenced order id does not exist."""

    kind = "not_found"


class CrossTenantAccessError(TenantOrdersError):
    """Raised when an actor targets an order owned by another tenant."""

    kind = "cross_tenant_access"


class PermissionDeniedError(TenantOrdersError):
    """Raised when the actor's role forbids the requested action."""

    kind = "permission_denied"


class ConflictError(TenantOrdersError):
    """Raised when a concurrent write kept winning until retries ran out."""

    kind = "conflict"


class StorageError(TenantOrdersError):
    """Raised when the persistence engine fails."""

    kind = "store_error"


class ConfigError(TenantOrdersError):
    """Raised when configuration is invalid."""

    kind = "config_error"
