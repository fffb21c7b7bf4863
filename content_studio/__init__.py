"""Content Studio: brand -> angle -> idea -> content generation backend."""

__version__ = "0.1.0"
