"""DTOs for use cases (plain dataclasses, no transport dependency)."""
