"""Base request schema shared by every API router.

Request bodies accept both snake_case and camelCase field names; responses
stay snake_case.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class StatusResponse(BaseModel):
    status: str = "ok"
