"""
moviegraph
GraphQL resolution engine for a graph of movies and actors
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
