# models.py

from pydantic import BaseModel, field_validator
from typing import Optional


# Field names follow the JSON the frontend sends. Presence and content
# checks live in the services so missing fields get a 400 with a readable
# message instead of a schema error.

class UserCreate(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    fullName: Optional[str] = None
    mobile: Optional[str] = None
    role: Optional[str] = None  # mechanic or customer

class UserLogin(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

class ServiceRequestModel(BaseModel):
    vehicleNumberPlate: Optional[str] = None
    issueDescription: Optional[str] = None

class AssignMechanicModel(BaseModel):
    mechanicId: Optional[str] = None

class StatusUpdateModel(BaseModel):
    status: Optional[str] = None

class PartUsageModel(BaseModel):
    partId: Optional[str] = None
    quantityUsed: Optional[int] = None

    # The form posts the raw input text; anything that is not a whole
    # number becomes None and is rejected by the job service.
    @field_validator("quantityUsed", mode="before")
    @classmethod
    def parse_quantity(cls, value):
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None
