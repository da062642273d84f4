"""Custom exception classes."""

from fastapi import HTTPException, status


class PlanRightException(HTTPException):
    """Base exception for application errors."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: str = "PLANRIGHT_ERROR",
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code


class SamplePropertyNotFoundError(PlanRightException):
    def __init__(self, property_id: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sample property not found: {property_id}",
            code="SAMPLE_PROPERTY_NOT_FOUND",
        )


class InvariantViolationError(PlanRightException):
    def __init__(self, rule_id: str, citation: str, message: str):
        self.rule_id = rule_id
        self.citation = citation
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{rule_id} [{citation}]: {message}",
            code="INVARIANT_VIOLATION",
        )
