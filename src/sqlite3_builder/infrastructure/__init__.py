"""Infrastructure layer: SQL assembly."""
