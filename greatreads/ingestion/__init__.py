"""
Ingestion layer: loads reader, catalog and review records supplied by the
external data store.

Submodules:
  record_loader — JSON loaders with per-record pydantic validation
"""
