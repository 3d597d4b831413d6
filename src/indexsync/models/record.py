"""Record models — Domain entities that get mirrored into the search index.

A record is owned by the caller's record store. The index only ever sees a
serialized copy of it, keyed by the lowercased natural key.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class IndexRecord(BaseModel):
    """Base class for records that can be synchronized into the index.

    Subclasses name the field that holds their natural key through
    ``natural_key_field``. Any additional attributes, declared or not, are
    serialized verbatim into the indexed document.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    natural_key_field: ClassVar[str] = "name"

    @property
    def natural_key(self) -> Any:
        """Raw natural-key value (not normalized)."""
        return getattr(self, self.natural_key_field, None)


class NameEntry(IndexRecord):
    """A dictionary entry for a personal name."""

    name: str = Field(description="The name itself; natural key of the entry")
    meaning: str | None = Field(default=None, description="Short meaning of the name")
    extended_meaning: str | None = Field(default=None, description="Longer explanation of the meaning")
    morphology: str | None = Field(default=None, description="Morphological breakdown")
    etymology: list[dict[str, str]] = Field(default_factory=list, description="Part/meaning pairs")
    geo_location: list[str] = Field(default_factory=list, description="Regions where the name is used")
    variants: list[str] = Field(default_factory=list, description="Spelling variants")
    famous_people: list[str] = Field(default_factory=list, description="Well-known bearers of the name")
    tone_mark: str | None = Field(default=None, description="Name written with tone marks")
    submitted_by: str | None = Field(default=None, description="Contributor who submitted the entry")
    created_at: datetime | None = Field(default=None, description="Creation timestamp in the record store")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp in the record store")
