"""Pydantic request/response schemas for the mediatag API."""
