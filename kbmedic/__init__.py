"""
kbmedic — order service for the KB-Medic pharmacy storefront.

    from kbmedic import orders as O    # Checkout and order access
    from kbmedic import identity       # Bearer token to caller
    from kbmedic import api            # FastAPI application
"""

__version__ = "0.1.0"

__all__ = ("__version__",)
