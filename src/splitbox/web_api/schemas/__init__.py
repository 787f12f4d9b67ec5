"""
Pydantic Schemas
===============
Request and response models for the API.
"""
from .split import (
    FormatRequest,
    FormatResponse,
    GroupModel,
    SplitRequestModel,
    SplitResponseModel,
    StatsModel,
)

__all__ = [
    "FormatRequest",
    "FormatResponse",
    "GroupModel",
    "SplitRequestModel",
    "SplitResponseModel",
    "StatsModel",
]
