"""FastAPI dependencies for the NOC API."""
