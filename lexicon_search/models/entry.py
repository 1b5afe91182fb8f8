"""Domain models for dictionary entries."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchMode(str, Enum):
    """Direction of a lexicon lookup."""

    FORWARD = "forward"
    REVERSE = "reverse"


class Sense(BaseModel):
    """One numbered or lettered definition block within an entry."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    label: Optional[str] = Field(None, description="Sense label, e.g. 'a' or '1'")
    pos: Optional[str] = Field(None, description="Part of speech specific to this sense")
    text: Optional[str] = Field(None, description="Definition body")
    formatted: Optional[str] = Field(None, description="Definition body with display markup")
    pos_formatted: Optional[str] = Field(None, description="Part of speech with display markup")


class Entry(BaseModel):
    """Immutable dictionary entry filed under a dialect headword."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    lemma: str = Field(..., description="Dialect headword")
    pos: Optional[str] = Field(None, description="Part of speech")
    senses: Tuple[Sense, ...] = Field(..., description="Ordered sense definitions")
    lemma_formatted: Optional[str] = Field(None, description="Headword with display markup")
    pos_formatted: Optional[str] = Field(None, description="Part of speech with display markup")

    @field_validator('lemma')
    @classmethod
    def validate_lemma(cls, v: str) -> str:
        """Reject headwords that are empty or only whitespace."""
        if not v.strip():
            raise ValueError("Lemma cannot be empty")
        return v

    @property
    def raw_text(self) -> str:
        """All sense texts joined by a single space."""
        return " ".join(sense.text or "" for sense in self.senses)
