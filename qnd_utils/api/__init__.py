"""API Layer: FastAPI integration for applications using qnd-utils."""
