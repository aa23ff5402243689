"""Products API permissions.

The catalog is public to read; only staff may create, edit or remove
categories and products.
"""

from common.permissions import IsAdminOrReadOnly

__all__ = ["IsAdminOrReadOnly"]
