"""Core services: logging, configuration and resource paths."""
