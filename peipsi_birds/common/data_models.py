"""Pydantic data models for crawl output.

BirdRecord is the unit written to the sink. Field names follow the
published JSON document (``rusName``, ``latName``) through aliases, while
Python code uses snake_case attributes.
"""

from pydantic import BaseModel, ConfigDict, Field


class LeafFields(BaseModel):
    """Text fields extracted from one species page."""

    model_config = ConfigDict(frozen=True)

    rus_name: str
    lat_name: str
    signs: str
    habitat: str


class BirdRecord(BaseModel):
    """One species with the taxonomic context it was found under."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order: str | None = Field(None, description="Current order heading")
    family: str | None = Field(None, description="Current family heading")
    rus_name: str = Field(
        ..., alias="rusName", description="Russian species name"
    )
    lat_name: str = Field(
        ..., alias="latName", description="Latin binomial name"
    )
    signs: str = Field(..., description="Identification signs paragraph")
    habitat: str = Field(..., description="Habitat paragraph")

    def to_document(self) -> dict[str, str]:
        """Serialize for the sink, omitting unset order and family."""
        return self.model_dump(by_alias=True, exclude_none=True)
