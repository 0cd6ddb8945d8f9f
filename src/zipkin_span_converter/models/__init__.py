"""Pydantic models used to describe spans outside of an SDK pipeline."""
