"""Configuration, constants and error taxonomy."""
