"""DTOs HTTP (Pydantic) por feature."""
