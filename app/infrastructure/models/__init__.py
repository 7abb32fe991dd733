"""Shared Pydantic model configuration.

Exports:
    InfrastructureModel: Base model for payload and response contracts
"""

from infrastructure.models.base import InfrastructureModel

__all__ = [
    "InfrastructureModel",
]
