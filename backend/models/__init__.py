"""Models package - configuration, Pydantic schemas and domain exceptions."""
