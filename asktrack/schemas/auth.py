from datetime import datetime
from pydantic import BaseModel

class LoginRequest(BaseModel):
    Int_number: str
    Int_code: str
    Int_pass: str

class LoginResponse(BaseModel):
    message: str
    token: str
    Int_number: str | None = None
    Int_code: str
    Int_type: str | None = None
    Int_Branch: str | None = None

class HealthResponse(BaseModel):
    message: str
    timestamp: datetime
