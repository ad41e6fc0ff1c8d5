"""
Result records returned by the Query Service.

The driver hands back loosely-typed records; these models are the only
shapes that cross from the query layer into the tool gateway.  Field
aliases carry the camelCase keys used on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _GraphRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready dict using wire key names."""
        return self.model_dump(by_alias=True)


class CodeSummary(_GraphRecord):
    """Distinct-node counts for each level of the containment hierarchy."""

    components: int = Field(ge=0)
    files: int = Field(ge=0)
    classes: int = Field(ge=0)
    methods: int = Field(ge=0)


class ComponentDetail(_GraphRecord):
    """One Component node with its precomputed quality scores and content counts."""

    name: str | None = None
    cohesion: int | float | None = Field(default=None, description="Precomputed, passed through")
    coupling: int | float | None = Field(default=None, description="Precomputed, passed through")
    file_count: int = Field(alias="fileCount", ge=0)
    class_count: int = Field(alias="classCount", ge=0)


class ComplexityMetric(_GraphRecord):
    """A method's fully-qualified signature and its complexity score."""

    method: str | None = None
    complexity: int = Field(gt=0)
