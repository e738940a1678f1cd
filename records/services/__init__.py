"""Data access functions used by the HTTP views and management commands."""
