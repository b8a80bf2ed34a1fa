"""API routers for mediatag endpoints."""
