"""API request/response schemas (camelCase on the wire)."""
