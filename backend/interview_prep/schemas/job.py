from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


# For POST /job/analyze
class JobAnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: Optional[str] = None
    job_description: Optional[str] = Field(None, alias="jobDescription")
    url: Optional[str] = None

    @property
    def text(self) -> Optional[str]:
        return self.description or self.job_description
