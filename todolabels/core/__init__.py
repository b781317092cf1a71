"""Constants, errors and logging setup shared across the package."""
