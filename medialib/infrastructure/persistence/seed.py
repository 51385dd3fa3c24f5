"""Fixed seed snapshot loaded into the record store at startup.

Fixture content only; the store deep-copies these rows so the snapshot
itself is never mutated and ``RecordStore.reset()`` can reload it.
"""

from collections import Counter
from dataclasses import dataclass, field

from medialib.domain.entities import (
    CollectionEntity,
    FolderEntity,
    MediaItemEntity,
    TagCategoryEntity,
    TagEntity,
    UserEntity,
)
from medialib.shared.utils.datetime import parse_datetime


@dataclass(frozen=True)
class SeedSnapshot:
    """Initial rows for every table."""

    folders: list[FolderEntity] = field(default_factory=list)
    media: list[MediaItemEntity] = field(default_factory=list)
    collections: list[CollectionEntity] = field(default_factory=list)
    tags: list[TagEntity] = field(default_factory=list)
    tag_categories: list[TagCategoryEntity] = field(default_factory=list)
    users: list[UserEntity] = field(default_factory=list)


_FOLDERS = [
    ("1", "Images", None, "#3B82F6"),
    ("2", "Documents", None, "#10B981"),
    ("3", "Videos", None, "#F59E0B"),
    ("4", "Marketing", "1", "#6366F1"),
    ("5", "Products", "1", "#EC4899"),
    ("6", "Team", "1", "#14B8A6"),
    ("7", "Reports", "2", "#8B5CF6"),
    ("8", "Contracts", "2", "#F43F5E"),
    ("9", "Tutorials", "3", "#EF4444"),
    ("10", "Web Assets", "1", "#0EA5E9"),
    ("11", "Social Media", "1", "#F97316"),
    ("12", "Icons", "10", "#8B5CF6"),
    ("13", "Banners", "10", "#EC4899"),
    ("14", "Logos", "10", "#10B981"),
    ("15", "Instagram", "11", "#6366F1"),
    ("16", "Twitter", "11", "#0EA5E9"),
    ("17", "Facebook", "11", "#3B82F6"),
]

# id, name, type, folder, size, status, tags, used, starred, favorited, created, modified
_MEDIA = [
    ("1", "hero-banner.jpg", "image", "13", "2.4 MB", "approved", ["hero", "banner", "web"], True, True, False, "2025-03-01T10:00:00Z", "2025-03-12T09:30:00Z"),
    ("2", "team-photo.jpg", "image", "6", "4.1 MB", "approved", ["team", "office"], True, False, True, "2025-01-20T14:00:00Z", "2025-02-02T11:15:00Z"),
    ("3", "spring-campaign.png", "image", "4", "1.8 MB", "approved", ["seasonal", "marketing", "featured"], True, True, True, "2025-02-18T08:45:00Z", "2025-02-27T16:20:00Z"),
    ("4", "annual-report-2024.pdf", "document", "7", "8.2 MB", "approved", ["report", "corporate"], True, False, False, "2025-01-05T09:00:00Z", "2025-01-18T13:40:00Z"),
    ("5", "instagram-post-01.jpg", "image", "15", "950 KB", "pending", ["social", "marketing"], False, False, False, "2025-02-21T12:10:00Z", "2025-02-25T10:05:00Z"),
    ("6", "product-teaser.mp4", "video", "3", "48.5 MB", "approved", ["product", "featured", "social"], True, True, False, "2025-02-10T15:30:00Z", "2025-03-20T17:00:00Z"),
    ("7", "vendor-contract.pdf", "document", "8", "540 KB", "approved", ["contract"], False, False, False, "2024-12-12T10:00:00Z", "2025-01-09T09:10:00Z"),
    ("8", "company-logo.svg", "image", "14", "120 KB", "approved", ["logo", "brand", "identity"], True, True, True, "2024-11-02T08:00:00Z", "2025-03-14T12:00:00Z"),
    ("9", "onboarding-tutorial.mp4", "video", "9", "120.3 MB", "draft", ["tutorial"], False, False, False, "2025-03-02T11:00:00Z", "2025-03-06T15:45:00Z"),
    ("10", "homepage-background.jpg", "image", "10", "3.3 MB", "approved", ["background", "web"], True, False, False, "2025-03-05T09:20:00Z", "2025-03-08T10:30:00Z"),
    ("11", "team-retreat.mp4", "video", "6", "210 MB", "approved", ["team", "lifestyle"], True, False, True, "2025-02-12T13:00:00Z", "2025-03-04T09:00:00Z"),
    ("12", "product-shot-front.jpg", "image", "5", "5.6 MB", "approved", ["product", "photography"], True, True, False, "2025-03-24T10:00:00Z", "2025-03-27T14:20:00Z"),
    ("13", "quarterly-chart.png", "image", "7", "640 KB", "approved", ["report", "design"], False, False, False, "2025-01-08T16:00:00Z", "2025-01-19T08:30:00Z"),
    ("14", "ui-icon-set.svg", "image", "12", "85 KB", "pending", ["ui", "icons", "interface"], False, False, False, "2025-03-11T12:00:00Z", "2025-03-11T12:00:00Z"),
    ("15", "twitter-card.png", "image", "16", "720 KB", "approved", ["social", "web"], True, False, False, "2025-03-19T10:40:00Z", "2025-03-21T11:00:00Z"),
    ("16", "facebook-cover.jpg", "image", "17", "1.2 MB", "approved", ["social", "banner"], True, False, True, "2025-03-18T09:00:00Z", "2025-03-22T15:10:00Z"),
    ("17", "product-shot-side.jpg", "image", "5", "5.1 MB", "pending", ["product", "photography"], False, False, False, "2025-03-25T10:30:00Z", "2025-03-28T09:00:00Z"),
    ("18", "brand-guidelines.pdf", "document", "2", "12.7 MB", "approved", ["brand", "identity", "corporate"], True, True, True, "2024-12-01T09:00:00Z", "2025-01-15T10:00:00Z"),
    ("19", "office-interior.jpg", "image", "6", "3.9 MB", "rejected", ["office", "interior"], False, False, False, "2025-02-14T11:00:00Z", "2025-02-16T12:30:00Z"),
    ("20", "draft-mockup.png", "image", "1", None, "draft", [], False, False, False, "2025-04-01T08:00:00Z", "2025-04-01T08:00:00Z"),
]

_TAG_CATEGORIES = [
    ("cat1", "Content Type", "Type of content"),
    ("cat2", "Purpose", "Content purpose or usage"),
    ("cat3", "Subject", "Main subject of content"),
    ("cat4", "Project", "Related project"),
    ("cat5", "Status", "Content status"),
]

_TAGS = [
    ("1", "product", "#3B82F6", "cat3"),
    ("2", "hero", "#10B981", "cat1"),
    ("3", "banner", "#F59E0B", "cat1"),
    ("4", "team", "#8B5CF6", "cat3"),
    ("5", "report", "#EC4899", "cat2"),
    ("6", "logo", "#14B8A6", "cat1"),
    ("7", "featured", "#F43F5E", "cat2"),
    ("8", "contract", "#0EA5E9", "cat1"),
    ("9", "tutorial", "#F97316", "cat2"),
    ("10", "social", "#6366F1", "cat2"),
    ("11", "seasonal", "#EF4444", "cat4"),
    ("12", "web", "#10B981", "cat2"),
    ("13", "marketing", "#8B5CF6", "cat4"),
    ("14", "background", "#0EA5E9", "cat1"),
    ("15", "office", "#F59E0B", "cat3"),
    ("16", "interior", "#6366F1", "cat3"),
    ("17", "lifestyle", "#EC4899", "cat3"),
    ("18", "photography", "#14B8A6", "cat1"),
    ("19", "design", "#F43F5E", "cat4"),
    ("20", "ui", "#3B82F6", "cat1"),
    ("21", "icons", "#10B981", "cat1"),
    ("22", "interface", "#F59E0B", "cat1"),
    ("23", "corporate", "#8B5CF6", "cat4"),
    ("24", "brand", "#EC4899", "cat2"),
    ("25", "identity", "#14B8A6", "cat2"),
    ("26", "approved", "#22C55E", "cat5"),
    ("27", "pending", "#F59E0B", "cat5"),
    ("28", "rejected", "#EF4444", "cat5"),
]

# id, name, description, items, created, modified, color, created_by, is_shared, shared_with
_COLLECTIONS = [
    ("1", "Homepage Redesign", "Assets for the new homepage design", ["1", "3", "8"], "2025-03-10", "2025-03-15", "#8B5CF6", "user1", True, ["user2", "user3"]),
    ("2", "Spring Campaign", "Marketing materials for Spring 2025", ["3", "5", "6"], "2025-02-20", "2025-02-28", "#10B981", "user1", True, ["user2"]),
    ("3", "Legal Documents", "Important contracts and legal files", ["4", "7"], "2025-01-15", "2025-03-01", "#F43F5E", "user3", True, ["user1"]),
    ("4", "Product Photoshoot", "New product line photography", ["1", "12", "17"], "2025-03-25", "2025-03-28", "#0EA5E9", "user1", False, []),
    ("5", "Social Media Content", "Assets for April social posts", ["6", "15", "16"], "2025-03-20", "2025-03-22", "#F97316", "user2", True, ["user1", "user3", "user4"]),
    ("6", "Annual Report Materials", "Graphics and documents for annual report", ["4", "18", "13"], "2025-01-10", "2025-01-20", "#6366F1", "user3", True, ["user1", "user5"]),
    ("7", "Team Resources", "Team photos and videos", ["2", "11", "19"], "2025-02-15", "2025-03-05", "#14B8A6", "user1", True, ["user2", "user3", "user4", "user5"]),
]

_DEFAULT_PREFERENCES = {"theme": "light", "viewMode": "grid", "gridSize": "medium", "defaultSort": "name"}

# id, name, email, role, last_active, created, preference overrides, recent folders, recent files
_USERS = [
    ("user1", "Alex Johnson", "alex.johnson@example.com", "admin", "2025-04-12T14:32:21Z", "2024-10-15T09:00:00Z", {}, ["5", "1", "10"], ["1", "8", "13"]),
    ("user2", "Samantha Chen", "samantha.chen@example.com", "editor", "2025-04-11T18:45:33Z", "2024-11-02T14:30:00Z", {"theme": "dark", "gridSize": "small", "defaultSort": "date"}, ["4", "11", "15"], ["3", "6", "15"]),
    ("user3", "Michael Rodriguez", "michael.rodriguez@example.com", "editor", "2025-04-12T10:15:07Z", "2024-10-28T11:45:00Z", {"viewMode": "list", "defaultSort": "type"}, ["7", "2", "8"], ["4", "7", "13"]),
    ("user4", "Emily Williams", "emily.williams@example.com", "viewer", "2025-04-10T15:22:41Z", "2025-01-15T13:20:00Z", {"gridSize": "large"}, ["6", "3", "9"], ["2", "5", "19"]),
    ("user5", "David Kim", "david.kim@example.com", "editor", "2025-04-11T09:35:18Z", "2024-12-05T10:10:00Z", {"theme": "dark", "defaultSort": "size"}, ["13", "14", "4"], ["8", "9", "18"]),
    ("current", "Jamie Smith", "jamie.smith@example.com", "admin", "2025-04-12T15:05:00Z", "2024-10-01T08:00:00Z", {}, ["1", "5", "7"], ["1", "3", "10"]),
]


def _folders(separator: str) -> list[FolderEntity]:
    paths: dict[str, str] = {}
    rows = []
    for folder_id, name, parent, color in _FOLDERS:
        path = FolderEntity.derive_path(name, paths.get(parent) if parent else None, separator)
        paths[folder_id] = path
        rows.append(FolderEntity(id=folder_id, name=name, parent=parent, path=path, color=color))
    return rows


def _media(folder_paths: dict[str, str], separator: str) -> list[MediaItemEntity]:
    rows = []
    for (media_id, name, media_type, folder, size, status, tags, used, starred,
         favorited, created, modified) in _MEDIA:
        rows.append(
            MediaItemEntity(
                id=media_id,
                name=name,
                type=media_type,
                folder=folder,
                path=f"{folder_paths[folder]}{separator}{name}",
                size=size,
                status=status,
                tags=list(tags),
                used=used,
                starred=starred,
                favorited=favorited,
                created=parse_datetime(created),
                modified=parse_datetime(modified),
                url=f"/api/placeholder/800/600?media={media_id}",
                thumbnail=f"/api/placeholder/200/150?media={media_id}",
            )
        )
    return rows


def _tag_usage(media: list[MediaItemEntity]) -> Counter[str]:
    return Counter(name.casefold() for item in media for name in set(item.tags))


def default_seed(separator: str = "/") -> SeedSnapshot:
    """Return the fixture snapshot used when the service starts.

    Folder and media paths are joined with ``separator``; tag counts are
    derived from the seeded media so they match actual usage.
    """
    folders = _folders(separator)
    folder_paths = {f.id: f.path for f in folders}
    media = _media(folder_paths, separator)
    usage = _tag_usage(media)
    return SeedSnapshot(
        folders=folders,
        media=media,
        collections=[
            CollectionEntity(
                id=cid,
                name=name,
                description=description,
                items=list(items),
                created=parse_datetime(created),
                modified=parse_datetime(modified),
                color=color,
                created_by=created_by,
                is_shared=is_shared,
                shared_with=list(shared_with),
            )
            for (cid, name, description, items, created, modified, color,
                 created_by, is_shared, shared_with) in _COLLECTIONS
        ],
        tags=[
            TagEntity(id=tid, name=name, color=color, count=usage[name], category_id=category_id)
            for tid, name, color, category_id in _TAGS
        ],
        tag_categories=[
            TagCategoryEntity(id=cid, name=name, description=description)
            for cid, name, description in _TAG_CATEGORIES
        ],
        users=[
            UserEntity(
                id=uid,
                name=name,
                email=email,
                role=role,
                last_active=parse_datetime(last_active),
                created=parse_datetime(created),
                preferences={**_DEFAULT_PREFERENCES, **overrides},
                recent_folders=list(recent_folders),
                recent_files=list(recent_files),
            )
            for (uid, name, email, role, last_active, created, overrides,
                 recent_folders, recent_files) in _USERS
        ],
    )
