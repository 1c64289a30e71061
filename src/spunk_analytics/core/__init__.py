"""Core configuration for the analytics service."""
