"""Tag and tag category domain entities."""

from dataclasses import dataclass

from medialib.domain.exceptions import ValidationException


@dataclass
class TagEntity:
    """Domain entity for a tag.

    ``name`` is unique case-insensitively across all tags. ``count`` is a
    cached usage counter adjusted incrementally; it never drops below zero.
    """

    id: str
    name: str
    color: str | None = None
    count: int = 0
    category_id: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.id:
            raise ValidationException("Tag ID is required", field="id")
        if not self.name or not self.name.strip():
            raise ValidationException("Tag name is required", field="name")
        if self.count < 0:
            self.count = 0

    def matches_name(self, name: str) -> bool:
        """Return whether ``name`` equals this tag's name, ignoring case."""
        return self.name.casefold() == name.casefold()

    def adjust_count(self, delta: int) -> None:
        """Add ``delta`` to the usage counter, flooring at zero."""
        self.count = max(0, self.count + delta)


@dataclass
class TagCategoryEntity:
    """Domain entity for a tag category (name unique case-insensitively)."""

    id: str
    name: str
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("Category ID is required", field="id")
        if not self.name or not self.name.strip():
            raise ValidationException("Category name is required", field="name")

    def matches_name(self, name: str) -> bool:
        return self.name.casefold() == name.casefold()
