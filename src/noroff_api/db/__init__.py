"""
noroff_api.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, paging helpers and repositories.
"""

# Package marker.
