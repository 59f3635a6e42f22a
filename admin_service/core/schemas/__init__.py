"""Shared response schemas."""

from admin_service.core.schemas.problem_details import ProblemDetails, ValidationProblemDetails

__all__ = ["ProblemDetails", "ValidationProblemDetails"]
