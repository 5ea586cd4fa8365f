"""
==============================================================================
Product Models Module
==============================================================================

Pydantic models for catalog products and their reviews.

==============================================================================
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, StringConstraints


# Display fields are trimmed; product IDs are stored exactly as given.
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Review(BaseModel):
    """
    Customer review owned by a single product.

    Reviews have no identity of their own and are never edited, so the
    model is frozen. ``date`` is stamped when the review is created.

    Attributes:
        user: Name of the reviewer
        rating: Star rating, 1-5 inclusive
        comment: Review text
        date: Creation timestamp
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    user: str = Field(..., min_length=1, description="Reviewer name")
    rating: int = Field(..., ge=1, le=5, description="Star rating (1-5)")
    comment: str = Field(..., min_length=1, description="Review comment")
    date: datetime = Field(default_factory=datetime.now, description="Creation timestamp")

    def display_line(self) -> str:
        """Single console line for the review list."""
        return (
            f"- {self.user} rated {self.rating}/5: {self.comment} "
            f"(on {self.date.strftime('%Y-%m-%d %H:%M:%S')})"
        )


class Product(BaseModel):
    """
    Product model for catalog items.

    Attributes:
        id: Caller-assigned identifier, case-sensitive and immutable
        name: Product display name
        price: Unit price, kept as Decimal to avoid float rounding
        description: Free-text description
        category: Category label
        reviews: Reviews in the order they were added
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., min_length=1, frozen=True, description="Product ID")
    name: NonEmptyStr = Field(..., description="Product name")
    price: Decimal = Field(..., ge=0, description="Unit price")
    description: NonEmptyStr = Field(..., description="Product description")
    category: NonEmptyStr = Field(..., description="Product category")
    reviews: List[Review] = Field(default_factory=list, description="Product reviews")

    def add_review(self, review: Review) -> "Product":
        """Append a review and return self for chaining."""
        self.reviews.append(review)
        return self

    def display_line(self) -> str:
        """Single console line for catalog listings and search results."""
        return (
            f"{self.id}: {self.name} - ${self.price} "
            f"({self.description}) [Category: {self.category}]"
        )
