"""Configuration, errors and shared constants."""
