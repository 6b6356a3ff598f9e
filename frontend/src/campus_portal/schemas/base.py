"""
Shared base for API resource schemas
The booking API speaks camelCase JSON; models expose snake_case attributes.
"""

from typing import Any, Dict

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base schema mapping snake_case fields to the API's camelCase keys"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"

    def to_api(self) -> Dict[str, Any]:
        """Serialize for a request body"""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Ref(ApiModel):
    """Reference to another resource by id, e.g. {"id": 3}"""

    id: int
