"""
noroff_api.auth

Authentication package.

Responsibilities:
- JWT helpers and validation.
- Password hashing.
- FastAPI auth dependencies (bearer token -> Principal, API key header).
"""

# Package marker.
