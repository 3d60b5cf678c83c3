"""FastAPI adapter for the copy entry store."""
