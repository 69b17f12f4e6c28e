"""Content transforms for lazydraft."""
