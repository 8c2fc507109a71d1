from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class CompanyCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=2, max_length=200)
    industry: Optional[str] = None
    size: Optional[str] = None
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
