"""Command groups for the lazydraft CLI."""
