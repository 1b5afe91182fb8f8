"""Search API endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..config import get_settings
from ..core.exceptions import LexiconError
from ..models.entry import SearchMode
from ..models.request import SearchRequest
from ..models.response import SearchResponse

router = APIRouter(prefix="/api/v1", tags=["search"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine


def _run_search(
    query: str,
    mode: Optional[SearchMode],
    offset: int,
    limit: Optional[int],
    include_raw: bool
) -> SearchResponse:
    if len(query) > settings.max_query_length:
        raise HTTPException(
            status_code=400,
            detail=f"Query too long. Maximum length is {settings.max_query_length} characters"
        )

    limit = min(limit or settings.page_size, settings.max_page_size)

    try:
        return search_engine.search(
            query=query,
            mode=mode,
            offset=offset,
            limit=limit,
            include_raw=include_raw
        )
    except LexiconError:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Search failed: {str(e)}"
        )


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search the lexicon",
    description="Accent-insensitive forward (headword) or reverse (definition) lexicon search"
)
async def search_lexicon(
    q: str = Query("", description="Search query, empty lists every entry"),
    mode: Optional[SearchMode] = Query(None, description="Search direction: forward or reverse"),
    offset: int = Query(0, ge=0, description="Number of ranked results to skip"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of results to return"),
    raw: bool = Query(False, description="Include joined sense text for each entry")
) -> SearchResponse:
    """
    Search the lexicon.

    Results are ranked by match class and then by headword. Use ``offset``
    and ``limit`` to page through them; ``has_more`` tells whether another
    page follows.
    """
    return _run_search(q, mode, offset, limit, raw)


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Search with request body",
    description="Search the lexicon using a structured request body"
)
async def search_with_body(request: SearchRequest) -> SearchResponse:
    """Search the lexicon using a JSON request body."""
    return _run_search(
        request.query,
        request.mode,
        request.offset,
        request.limit,
        request.include_raw
    )
