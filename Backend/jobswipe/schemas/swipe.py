# In backend/jobswipe/schemas/swipe.py

import uuid
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# direction is checked by the swipe service, which raises InvalidInput

class JobSwipeCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: uuid.UUID = Field(alias="jobId")
    direction: str

class CandidateSwipeCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: uuid.UUID = Field(alias="jobId")
    candidate_id: uuid.UUID = Field(alias="candidateId")
    direction: str

class SwipeResult(BaseModel):
    success: bool = True
    matched: bool
    match_id: Optional[uuid.UUID] = Field(default=None, serialization_alias="matchId")
    # None means the plan is not metered
    swipes_remaining: Optional[int] = Field(default=None, serialization_alias="swipesRemaining")
    super_likes_remaining: Optional[int] = Field(default=None, serialization_alias="superLikesRemaining")
