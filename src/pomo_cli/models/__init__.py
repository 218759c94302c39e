"""Data models for pomo."""
