"""Pure validation and formatting helpers."""
