from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class ProfileUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=2, max_length=200)
    headline: Optional[str] = Field(default=None, max_length=200)
    avatar_url: Optional[str] = Field(default=None, max_length=512, alias="avatarUrl")
    skills: Optional[List[str]] = None
