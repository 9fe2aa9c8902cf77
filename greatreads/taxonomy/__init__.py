"""Enumerated vocabularies for catalog attributes and integrity tiers."""
