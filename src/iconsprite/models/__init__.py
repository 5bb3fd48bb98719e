"""Data models for the icon sprite builder."""
