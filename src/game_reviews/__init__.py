"""Game Reviews API - a game review catalog with role-gated mutations."""

__version__ = "0.1.0"
