"""Router exports for the addon API."""
from . import addon, health

__all__ = ["addon", "health"]
