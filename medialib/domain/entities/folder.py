"""Folder domain entity.

Folders form a tree through the nullable ``parent`` pointer; ``path`` is the
denormalized chain of ancestor names and is derived, never set by callers.
"""

from dataclasses import dataclass

from medialib.domain.exceptions import ValidationException


@dataclass
class FolderEntity:
    """Domain entity for a folder. Validation runs on construction."""

    id: str
    name: str
    parent: str | None
    path: str
    color: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate folder business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Folder ID is required", field="id")
        if not self.name or not self.name.strip():
            raise ValidationException("Folder name is required", field="name")
        if self.parent == self.id:
            raise ValidationException(
                "Folder cannot be its own parent",
                field="parent",
                error_code="invalid_parent",
            )

    @staticmethod
    def derive_path(name: str, parent_path: str | None, separator: str) -> str:
        """Return the path for a folder named ``name`` under ``parent_path``.

        Args:
            name: The folder's own name.
            parent_path: Path of the parent folder, or None for a root folder.
            separator: Separator placed between ancestor names.

        Returns:
            ``parent_path + separator + name``, or just ``name`` at the root.
        """
        if not parent_path:
            return name
        return f"{parent_path}{separator}{name}"
