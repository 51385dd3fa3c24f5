"""Core constants: shared literal values used across entity services."""

# Palette used when a folder, collection or tag is created without a color.
COLOR_PALETTE: tuple[str, ...] = (
    "#3B82F6",
    "#10B981",
    "#F59E0B",
    "#6366F1",
    "#EC4899",
    "#14B8A6",
    "#8B5CF6",
    "#F43F5E",
    "#0EA5E9",
    "#F97316",
    "#EF4444",
)

# Media defaults applied on create when the caller omits them.
DEFAULT_MEDIA_STATUS = "draft"

# Listing defaults
DEFAULT_POPULAR_TAGS_LIMIT = 10
