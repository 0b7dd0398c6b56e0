"""Closed vocabularies shared across the package (enums and transition tables)."""
