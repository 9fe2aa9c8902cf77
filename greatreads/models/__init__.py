"""Frozen pydantic records: readers, books, recommendations, reviews."""
