"""Data models and the static recipe catalog."""
