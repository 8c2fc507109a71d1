# schemas/job.py file
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Literal, Optional

LocationType = Literal["onsite", "remote", "hybrid"]
EmploymentType = Literal["full-time", "part-time", "contract", "internship", "freelance"]
ExperienceLevel = Literal["entry", "mid", "senior", "lead", "executive"]

class JobCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=50)
    location: Optional[str] = None
    location_type: LocationType = Field(default="onsite", alias="locationType")
    employment_type: EmploymentType = Field(default="full-time", alias="employmentType")
    experience_level: ExperienceLevel = Field(default="mid", alias="experienceLevel")
    min_salary: Optional[int] = Field(default=None, ge=0, alias="minSalary")
    max_salary: Optional[int] = Field(default=None, ge=0, alias="maxSalary")
    currency: str = Field(default="USD", min_length=3, max_length=3)
    skills: List[str] = []
    status: Literal["active", "draft"] = "active"

    @model_validator(mode="after")
    def check_salary_range(self):
        if self.min_salary is not None and self.max_salary is not None and self.min_salary > self.max_salary:
            raise ValueError("min_salary cannot exceed max_salary")
        return self
