"""Core infrastructure: errors, XDG paths and settings."""
