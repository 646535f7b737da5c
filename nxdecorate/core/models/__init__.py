"""
Domain models — Pydantic types for the decorator.

All models are re-exported here for convenient access:

    from nxdecorate.core.models import Action, Receipt, DecorateConfig
"""

from nxdecorate.core.models.action import Action, Receipt
from nxdecorate.core.models.config import DecorateConfig

__all__ = [
    # action.py
    "Action",
    # config.py
    "DecorateConfig",
    "Receipt",
]
