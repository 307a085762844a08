"""Core configuration, dependencies and exception handling."""
