from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for summary payloads, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GroupTotal(BaseModel):
    count: int
    total: float


class DeletedCount(CamelModel):
    deleted_count: int
