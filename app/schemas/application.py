# ========================================
# app/schemas/application.py
# ========================================

from pydantic import BaseModel, ConfigDict
from typing import Any, Optional

# 1. Input: Create Application. Applicant-supplied extras are stored as-is.
class ApplicationCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    job_id: str
    applicant_email: Optional[Any] = None
    status: Optional[Any] = None

# 2. Input: Update Status. Any other field in the body is ignored.
class ApplicationStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Any

# 3. Output: Stored application
class ApplicationResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    job_id: Optional[Any] = None
    applicant_email: Optional[Any] = None
    status: Optional[Any] = None

# 4. Output: Application joined with its job's display fields
class ApplicationDetailResponse(ApplicationResponse):
    title: Optional[Any] = None
    company: Optional[Any] = None
    company_logo: Optional[Any] = None
    location: Optional[Any] = None

# 5. Output: update_one acknowledgement
class UpdateResponse(BaseModel):
    acknowledged: bool
    matched_count: int
    modified_count: int
