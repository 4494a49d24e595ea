"""
noroff_api.api

API package for the Noroff practice API.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, error envelope and request models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request validation + auth + guard + delegation to repositories.
