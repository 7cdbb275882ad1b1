"""Gateway API endpoints."""
