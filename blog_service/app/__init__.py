"""
Application package initializer.

``main`` assembles the FastAPI app; ``core`` holds configuration,
logging, the data store and caller identification; ``services`` holds
the business rules; ``schemas`` the request and response models; and
``api`` the versioned routes.
"""

from .main import app  # noqa: F401
