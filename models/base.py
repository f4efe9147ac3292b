from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Base class for records and payloads, serialized with camelCase keys
class Base(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
