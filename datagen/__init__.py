"""Core package for the fake identity data generator."""

__all__ = [
    "cli",
    "config",
    "corruption",
    "generate",
    "identity",
    "io",
    "plugin_registry",
    "regions",
    "report",
    "schemas",
    "utils",
    "validate",
]
