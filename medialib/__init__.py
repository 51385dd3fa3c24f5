"""In-memory media library service: folders, media, collections, tags and users."""
