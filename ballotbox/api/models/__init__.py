"""Pydantic request/response models for the Ballotbox API."""
