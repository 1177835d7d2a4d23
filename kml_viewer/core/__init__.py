"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants (element tags, Earth radius, units)
- exceptions: Custom exception hierarchy
- logging_config: Logger configuration for the ``kml_viewer`` namespace
"""
