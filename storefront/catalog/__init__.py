"""
Catalog package: search client, wire schemas and the reference proxy.

The search client is what the storefront UI uses to fetch pages of
products. The router and Typesense modules implement the ``/search``
endpoint it talks to, so a complete stack can be run locally.
"""

from .errors import HttpError, NetworkError, ParseError, SearchError  # noqa: F401
from .schemas import Product, ProductImage, SearchPage  # noqa: F401
from .search_client import SearchClient  # noqa: F401
