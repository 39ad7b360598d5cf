"""API - Vistas JSON sobre FastAPI."""
