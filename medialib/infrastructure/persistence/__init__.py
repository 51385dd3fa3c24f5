"""In-memory persistence: record store and seed snapshot."""

from medialib.infrastructure.persistence.record_store import RecordStore, RecordTable
from medialib.infrastructure.persistence.seed import SeedSnapshot, default_seed

__all__ = ["RecordStore", "RecordTable", "SeedSnapshot", "default_seed"]
