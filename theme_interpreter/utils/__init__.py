"""Helper utilities: logging and unit conversion."""
