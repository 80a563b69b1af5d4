"""Pydantic models for statuses, deploy history and configuration."""
