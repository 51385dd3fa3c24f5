"""Infrastructure: record store, fault injection, security."""
