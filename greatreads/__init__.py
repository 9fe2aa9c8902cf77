"""
GreatReads discovery core: book recommendations and review integrity.

Packages:
  recommendations — signal evaluators, scoring engine, discovery helpers.
  integrity       — trust score, integrity analyzer, corpus summaries.
  models          — frozen pydantic records exchanged with the data store.
  taxonomy        — genre / mood / format / risk-tier vocabularies.
  ingestion       — JSON record loaders.
  reporting       — terminal formatters and flat-file export.
  utils           — logging setup and time helpers.
"""

__version__ = "0.1.0"
