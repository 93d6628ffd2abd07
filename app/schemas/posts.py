"""Response schema for posts."""

from pydantic import BaseModel, ConfigDict, Field


class PostRead(BaseModel):
    """Created post; image is the stored file name under the static path."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    content: str
    image: str
    user_id: int = Field(..., alias="userId")
