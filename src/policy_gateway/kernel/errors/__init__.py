"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── ValidationError
    │       └── InvalidInputError
    ├── ApplicationError         (application.py)
    │   ├── UnauthorizedError
    │   │   └── MissingIdentityError
    │   ├── ForbiddenError
    │   │   └── AccessDeniedError
    │   ├── TimeoutError
    │   └── InternalError
    └── InfrastructureError      (infrastructure.py)
        └── ExternalServiceError
            └── EngineUnavailableError
"""

from policy_gateway.kernel.errors.application import (
    AccessDeniedError,
    ApplicationError,
    ForbiddenError,
    InternalError,
    MissingIdentityError,
    TimeoutError,
    UnauthorizedError,
)
from policy_gateway.kernel.errors.base import BaseError
from policy_gateway.kernel.errors.domain import (
    DomainError,
    InvalidInputError,
    ValidationError,
)
from policy_gateway.kernel.errors.infrastructure import (
    EngineUnavailableError,
    ExternalServiceError,
    InfrastructureError,
)

__all__ = [
    "AccessDeniedError",
    "ApplicationError",
    "BaseError",
    "DomainError",
    "EngineUnavailableError",
    "ExternalServiceError",
    "ForbiddenError",
    "InfrastructureError",
    "InternalError",
    "InvalidInputError",
    "MissingIdentityError",
    "TimeoutError",
    "UnauthorizedError",
    "ValidationError",
]
