"""
Bollinger Engine Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from bollinger.services.base import BaseService, ServiceError, ValidationError

__all__ = ["BaseService", "ServiceError", "ValidationError"]
