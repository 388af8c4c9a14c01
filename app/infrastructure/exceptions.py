"""Infrastructure exceptions for the hosted backend (store and identity provider).

Both extend DependencyException so services and exception handlers
treat them as dependency failures (HTTP 500) without importing
infrastructure types.
"""

from app.domain.exceptions import DependencyException


class StoreError(DependencyException):
    """A store (PostgREST) request failed or returned a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        resource: str | None = None,
    ) -> None:
        super().__init__(
            "store",
            f"Store request failed: {message}",
            status_code=status_code,
            resource=resource,
        )
        self.status_code = status_code


class IdentityProviderError(DependencyException):
    """An identity-provider (auth API) request failed or returned a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(
            "identity_provider",
            f"Identity provider request failed: {message}",
            status_code=status_code,
            operation=operation,
        )
        self.status_code = status_code
