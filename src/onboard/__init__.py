"""onboard: OKLCH palette and accessibility tooling for the site theme editor."""

__version__ = "0.1.0"

__all__ = ["__version__"]
