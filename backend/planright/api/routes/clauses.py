"""Clause reference endpoints."""

from fastapi import APIRouter

from planright.engine.clauses import lookup_clause
from planright.models.schemas.assessment import ClauseResponse

router = APIRouter()


@router.get("/{citation:path}", response_model=ClauseResponse)
async def get_clause(citation: str) -> ClauseResponse:
    """Get display text for a clause; unknown citations have ``found`` false."""
    info = lookup_clause(citation)
    return ClauseResponse(
        citation=citation,
        title=info.title,
        summary=info.summary,
        found=info.found,
    )
