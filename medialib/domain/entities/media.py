"""Media item domain entity."""

from dataclasses import dataclass, field
from datetime import datetime

from medialib.domain.exceptions import ValidationException


@dataclass
class MediaItemEntity:
    """Domain entity for a media item (image, video, document...).

    ``tags`` holds tag *names*, not ids; order is not significant but is kept
    stable. ``folder`` must reference an existing folder when the item is
    created or moved.
    """

    id: str
    name: str
    type: str
    folder: str
    created: datetime
    modified: datetime
    path: str = ""
    size: str | None = None
    status: str = "draft"
    tags: list[str] = field(default_factory=list)
    ai_tags: list[str] = field(default_factory=list)
    used: bool = False
    starred: bool = False
    favorited: bool = False
    used_in: list[str] = field(default_factory=list)
    dimensions: str | None = None
    url: str | None = None
    thumbnail: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate media business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Media item ID is required", field="id")
        if not self.name:
            raise ValidationException("Media item name is required", field="name")
        if not self.type:
            raise ValidationException("Media item type is required", field="type")
        if not self.folder:
            raise ValidationException("Media item folder is required", field="folder")

    def has_tag(self, name: str) -> bool:
        """Return whether ``name`` is among this item's tags (exact match)."""
        return name in self.tags
