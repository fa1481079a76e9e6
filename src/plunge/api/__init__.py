"""
Plunge - API Layer

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic request/response models
- services/   : Command pipeline shared by the routes
- middleware/ : Error handling
"""

from plunge.api.main import create_app

__all__ = ["create_app"]
