"""
HTTP API — FastAPI adapters for checkout, order history and store settings.

    app = create_app(Container.build(get_config()))
"""

from kbmedic.api._app import create_app
from kbmedic.api._deps import Container
from kbmedic.api._errors import register_error_handlers, status_for
from kbmedic.api._routes import router

__all__ = ("create_app", "Container", "router", "register_error_handlers", "status_for")
