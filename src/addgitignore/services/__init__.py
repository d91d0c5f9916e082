"""
addgitignore services.

CatalogClient lists templates, DownloadService writes one to disk.
"""

from addgitignore.services.catalog import CatalogClient
from addgitignore.services.download import DownloadService

__all__ = ["CatalogClient", "DownloadService"]
