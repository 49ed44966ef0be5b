"""FastAPI application factory and request-level error handling."""
