"""Infrastructure: SQLModel engine wiring and repository implementations."""
