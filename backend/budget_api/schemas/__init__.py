"""Schemas — Pydantic models for API payloads and responses."""
