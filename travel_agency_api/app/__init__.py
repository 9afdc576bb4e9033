"""FastAPI application for the travel agency enrollment API."""
