"""
Pydantic schema definitions for API payloads.

Each domain (profiles, posts, ratings) defines its own Pydantic models
for request and response bodies.  The service layer returns the read
models directly.
"""
