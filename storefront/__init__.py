"""
Storefront catalog search.

``storefront.ui`` holds the search box logic (debouncing, pagination
state, infinite scrolling, view models) and ``storefront.catalog`` the
HTTP side: the client that talks to ``/search`` and the reference
FastAPI proxy that serves it from Typesense.
"""

__version__ = "1.0.0"
