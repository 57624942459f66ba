# ========================================
# app/schemas/job.py
# ========================================

from pydantic import BaseModel, ConfigDict
from typing import Any, Optional

# 1. Input: What the employer posts. Fields are opaque JSON values and
#    unknown fields are stored as-is.
class JobCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    hr_email: Optional[Any] = None
    title: Optional[Any] = None
    company: Optional[Any] = None
    company_logo: Optional[Any] = None
    location: Optional[Any] = None
    status: Optional[Any] = None

# 2. Output: Stored job
class JobResponse(JobCreate):
    id: str
    totalApplicant: Optional[Any] = None

# 3. Output: insert_one acknowledgement
class InsertResponse(BaseModel):
    acknowledged: bool
    inserted_id: str
