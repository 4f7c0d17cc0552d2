from __future__ import annotations
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.uri import is_absolute


# -----------------------------------------------------------------------------
# Docs
# -----------------------------------------------------------------------------
class Docs(BaseModel):
    """
    Human-readable documentation of a relation type or of an href variable.

    Immutable. `Docs()` (or `empty_docs()`) is the identity of merge_with.
    """
    description: Tuple[str, ...] = Field(
        (),
        description="Short description, one entry per paragraph"
    )
    detailed_description: Optional[str] = Field(
        None,
        description="Long-form description, rendered from an included markdown file"
    )
    link: Optional[str] = Field(
        None,
        description="Absolute URI of further documentation"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("link")
    @classmethod
    def link_must_be_absolute(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_absolute(value):
            raise ValueError(f"Documentation link must be an absolute URI: {value!r}")
        return value

    @property
    def has_description(self) -> bool:
        return bool(self.description)

    @property
    def has_detailed_description(self) -> bool:
        return self.detailed_description is not None

    @property
    def has_link(self) -> bool:
        return self.link is not None

    @property
    def is_empty(self) -> bool:
        return not (self.has_description or self.has_detailed_description or self.has_link)

    def merge_with(self, other: Docs) -> Docs:
        """
        Merges the docs of two declarations of the same relation type.

        Description lines are concatenated (this, then other). The detailed
        description and the link of this instance win; the other's are only
        used where this one has none.
        """
        return Docs(
            description=self.description + other.description,
            detailed_description=(
                self.detailed_description
                if self.detailed_description is not None
                else other.detailed_description
            ),
            link=self.link if self.link is not None else other.link,
        )


def empty_docs() -> Docs:
    return Docs()


# -----------------------------------------------------------------------------
# Declarations
# -----------------------------------------------------------------------------
class DocDeclaration(BaseModel):
    """Documentation as declared next to an endpoint, before resolution."""
    rel: Optional[str] = Field(
        None,
        description="Relation type this documentation belongs to"
    )
    value: list[str] = Field(
        default_factory=list,
        description="Description lines"
    )
    link: Optional[str] = Field(
        None,
        description="Absolute or relative link to further documentation",
        examples=["http://example.org/docs/products.html", "/docs/products.html"]
    )
    include: Optional[str] = Field(
        None,
        description="Markdown file below the documentation root",
        examples=["/rel/products.md", "products.md"]
    )

    @field_validator("value", mode="before")
    @classmethod
    def single_line_as_list(cls, value):
        if isinstance(value, str):
            return [value]
        return value
