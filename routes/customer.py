# routes/customer.py

from fastapi import APIRouter, Depends
from models import ServiceRequestModel
from database import DocumentStore, get_db
from auth import require_roles
from services.jobs import JobService

router = APIRouter(prefix="/api/customer", tags=["Customer"])

# Submit a service request
@router.post("/request-service", status_code=201)
def request_service(request: ServiceRequestModel, user=Depends(require_roles("customer")), store: DocumentStore = Depends(get_db)):
    job = JobService(store).create_request(user["id"], request.vehicleNumberPlate, request.issueDescription)
    return {"message": "Service request submitted successfully.", "jobCard": job}

# Status of the customer's own job cards
@router.get("/status")
def get_status(user=Depends(require_roles("customer")), store: DocumentStore = Depends(get_db)):
    return JobService(store).list_for_customer(user["id"])
