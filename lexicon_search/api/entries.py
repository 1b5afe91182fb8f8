"""Entry collection API endpoints."""

from fastapi import APIRouter, HTTPException, Path, Query

from ..core.scorer import BEST_RANK
from ..models.request import LoadEntriesRequest
from ..models.response import CountResponse, EntryResult, LoadResponse

router = APIRouter(prefix="/api/v1", tags=["entries"])

# Import the global search engine instance
from ..engine_instance import search_engine


@router.get(
    "/entries/count",
    response_model=CountResponse,
    summary="Count entries",
    description="Get the number of entries in the loaded lexicon"
)
async def count_entries() -> CountResponse:
    """Get the number of entries in the loaded lexicon."""
    return CountResponse(total_entries=len(search_engine.entries))


@router.get(
    "/entries/{position}",
    response_model=EntryResult,
    summary="Get entry by position",
    description="Get a single entry by its position in the collection"
)
async def get_entry(
    position: int = Path(..., ge=0, description="Position of the entry in the collection"),
    raw: bool = Query(False, description="Include joined sense text")
) -> EntryResult:
    """Get a single entry by its position in the collection."""
    entry = search_engine.get_entry(position)
    if entry is None:
        raise HTTPException(
            status_code=404,
            detail=f"No entry at position {position}"
        )

    return EntryResult.from_entry(position, BEST_RANK, entry, include_raw=raw)


@router.post(
    "/entries",
    response_model=LoadResponse,
    summary="Load entries",
    description="Replace the loaded lexicon with the posted entries"
)
async def load_entries(request: LoadEntriesRequest) -> LoadResponse:
    """
    Replace the loaded lexicon.

    Indexes are rebuilt once for the whole collection before the new
    entries become searchable.
    """
    try:
        search_engine.load_entries(request.entries)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to load entries: {str(e)}"
        )

    return LoadResponse(
        message="Entries loaded successfully",
        total_entries=len(search_engine.entries),
        build_time_ms=search_engine.index_manager.get_stats()["build_time_ms"]
    )
