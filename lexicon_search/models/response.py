"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .entry import Entry, SearchMode, Sense


class EntryResult(BaseModel):
    """Individual search result."""

    position: int = Field(..., ge=0, description="Position of the entry in the collection")
    rank: int = Field(..., ge=0, le=7, description="Rank class (0 is the strongest match)")
    lemma: str = Field(..., description="Dialect headword")
    pos: Optional[str] = Field(None, description="Part of speech")
    senses: List[Sense] = Field(..., description="Sense definitions")
    lemma_formatted: Optional[str] = Field(None, description="Headword with display markup")
    pos_formatted: Optional[str] = Field(None, description="Part of speech with display markup")
    raw_text: Optional[str] = Field(None, description="Joined sense texts, when requested")

    @classmethod
    def from_entry(
        cls,
        position: int,
        rank: int,
        entry: Entry,
        include_raw: bool = False
    ) -> "EntryResult":
        """Build a result from a ranked entry."""
        return cls(
            position=position,
            rank=rank,
            lemma=entry.lemma,
            pos=entry.pos,
            senses=list(entry.senses),
            lemma_formatted=entry.lemma_formatted,
            pos_formatted=entry.pos_formatted,
            raw_text=entry.raw_text if include_raw else None,
        )


class SearchResponse(BaseModel):
    """Response for search queries."""

    query: str = Field(..., description="Original search query")
    normalized_query: str = Field(..., description="Query after accent and case folding")
    mode: SearchMode = Field(..., description="Search direction used")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    total_entries: int = Field(..., description="Number of entries in the collection")
    total_results: int = Field(..., description="Number of entries matching the query")
    offset: int = Field(..., description="Position of the first returned result")
    limit: Optional[int] = Field(None, description="Maximum number of results returned")
    has_more: bool = Field(..., description="Whether more results follow this page")
    results: List[EntryResult] = Field(..., description="Ranked results for this page")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class CountResponse(BaseModel):
    """Collection size response."""

    total_entries: int = Field(..., description="Number of entries in the collection")


class LoadResponse(BaseModel):
    """Response after replacing the entry collection."""

    message: str = Field(..., description="Outcome message")
    total_entries: int = Field(..., description="Number of entries now loaded")
    build_time_ms: float = Field(..., description="Time spent building indexes")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")


class MetricsResponse(BaseModel):
    """Performance metrics response."""

    total_queries: int = Field(..., description="Total queries processed")
    forward_queries: int = Field(..., description="Queries in forward mode")
    reverse_queries: int = Field(..., description="Queries in reverse mode")
    empty_queries: int = Field(..., description="Queries that were empty after normalization")
    no_match_rate: float = Field(..., description="Share of non-empty queries with no results")
    average_response_time_ms: float = Field(..., description="Average response time")
    total_entries: int = Field(..., description="Entries currently indexed")
    memory_usage_mb: float = Field(..., description="Resident memory of this process in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")
