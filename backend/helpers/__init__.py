"""Request, sanitization and validation helpers."""
