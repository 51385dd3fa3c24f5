"""Cross-cutting helpers shared by every layer (logging, ids, time)."""
