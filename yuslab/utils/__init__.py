"""Reproducibility helpers: seeding, timestamps, JSON files, timing."""
