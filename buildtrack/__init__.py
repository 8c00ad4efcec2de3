"""Construction project progress tracking with archive lifecycle and access-code authorization"""

__version__ = "1.0.0"
