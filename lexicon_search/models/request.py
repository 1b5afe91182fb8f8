"""Request models for API endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field

from .entry import Entry, SearchMode


class SearchRequest(BaseModel):
    """Request model for search queries."""

    query: str = Field(default="", description="Search query, empty lists everything")
    mode: Optional[SearchMode] = Field(None, description="Search direction, defaults to the service mode")
    offset: int = Field(default=0, ge=0, description="Number of ranked results to skip")
    limit: Optional[int] = Field(None, ge=1, le=500, description="Maximum number of results to return")
    include_raw: bool = Field(default=False, description="Whether to include joined sense text")


class LoadEntriesRequest(BaseModel):
    """Request model for replacing the entry collection."""

    entries: List[Entry] = Field(..., description="Entries to load, in display order")
