from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class MessageCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Emptiness is checked after trimming by the conversation service
    content: Optional[str] = None
    message_type: str = Field(default="text", alias="messageType", max_length=20)
