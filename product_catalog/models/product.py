"""Product models for document store representation."""

import uuid
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def new_product_id() -> str:
    """Generate a collision-resistant product identifier."""
    return uuid.uuid4().hex


class ProductUrls(BaseModel):
    """Image URLs for a product."""

    regular: str
    small: str
    thumb: str


class ProductLinks(BaseModel):
    """API and web links for a product."""

    model_config = ConfigDict(populate_by_name=True)

    self_: str = Field(alias="self")
    html: str


class ProductUser(BaseModel):
    """Author of a product photo."""

    id: str
    first_name: str
    username: str
    last_name: Optional[str] = None
    portfolio_url: Optional[str] = None


class ProductTag(BaseModel):
    """A labeled category attached to a product."""

    title: str


class Product(BaseModel):
    """Product record as stored in the document store.

    Validation happens on construction, so a Product instance always
    satisfies the required-field constraints. Unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(
        default_factory=new_product_id,
        min_length=1,
        validation_alias=AliasChoices("id", "_id"),
    )
    description: Optional[str] = None
    alt_description: Optional[str] = None
    likes: int
    urls: ProductUrls
    links: ProductLinks
    user: ProductUser
    tags: List[ProductTag] = Field(default_factory=list)

    def has_tag(self, title: str) -> bool:
        """Return True if any tag on the product carries this title."""
        return any(tag.title == title for tag in self.tags)

    def to_document(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible document for the store."""
        return self.model_dump(mode="json", by_alias=True)


class ProductChanges(BaseModel):
    """Partial update for a product.

    Only the editable top-level fields are accepted; any other key fails
    validation. Fields that were not supplied are left out of the merge.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    description: Optional[str] = None
    alt_description: Optional[str] = None
    likes: Optional[int] = None
    urls: Optional[ProductUrls] = None
    links: Optional[ProductLinks] = None
    user: Optional[ProductUser] = None
    tags: Optional[List[ProductTag]] = None

    def to_document(self) -> dict[str, Any]:
        """Serialize only the fields that were explicitly set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def apply_to(self, product: Product) -> Product:
        """Return a new Product with these changes overwriting top-level keys.

        Nested sub-objects are replaced wholesale. The merged record is
        validated again, so clearing a required field raises.
        """
        merged = product.to_document()
        merged.update(self.to_document())
        return Product.model_validate(merged)


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a delete operation."""

    deleted_count: int  # 0 or 1
