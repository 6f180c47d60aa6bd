"""Application services."""

from .resolution import ResolutionService
from .verification import VerificationService

__all__ = ["ResolutionService", "VerificationService"]
