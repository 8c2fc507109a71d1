import uuid
from pydantic import BaseModel, ConfigDict, Field
from typing import List

class NotificationsMarkRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    notification_ids: List[uuid.UUID] = Field(default_factory=list, alias="notificationIds")
    mark_all: bool = Field(default=False, alias="markAll")

class NotificationsDelete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    notification_ids: List[uuid.UUID] = Field(default_factory=list, alias="notificationIds")
    delete_all: bool = Field(default=False, alias="deleteAll")
