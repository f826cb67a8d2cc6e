# Services Module
from .catalog import CatalogClient, CatalogLookup, CatalogProduct

__all__ = ["CatalogClient", "CatalogLookup", "CatalogProduct"]
