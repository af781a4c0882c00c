"""JSON API for the workspace operations."""
