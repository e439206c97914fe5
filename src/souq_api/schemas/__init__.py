"""Pydantic schemas shared across services and endpoints."""
