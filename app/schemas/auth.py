from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Optional

# 1. Input: Identity to embed in the session token
class IdentityPayload(BaseModel):
    """
    Caller identity; either `email` or `userEmail` must be present.

    Addresses are format-checked but kept exactly as posted, since they are
    compared verbatim against stored applicant emails.
    """
    model_config = ConfigDict(extra="allow")

    email: Optional[str] = None
    userEmail: Optional[str] = None

    @field_validator("email", "userEmail")
    @classmethod
    def check_format(cls, value):
        if value is None:
            return value
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @model_validator(mode="after")
    def require_email(self):
        if not self.email and not self.userEmail:
            raise ValueError("identity must include email or userEmail")
        return self

# 2. Output: Simple message
class MessageResponse(BaseModel):
    message: str
