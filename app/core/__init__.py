"""Core configuration, security and dependencies."""
