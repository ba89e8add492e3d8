"""Shared helpers: configuration, logging, seeding and text normalization."""
