"""
Service layer.

Each service encapsulates the business rules for one domain and works
against the ``BlogStore`` it is given, so the same logic serves the
HTTP routes and direct callers such as tests.
"""
