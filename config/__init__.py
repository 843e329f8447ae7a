"""Configuration package for the Disclosure Check tool."""

from .settings import APIConfig, SETTINGS, PROJECT_ROOT

__all__ = ["APIConfig", "SETTINGS", "PROJECT_ROOT"]
