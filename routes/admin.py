from fastapi import APIRouter, Depends
from models import AssignMechanicModel
from database import DocumentStore, get_db
from auth import require_roles
from services.jobs import JobService

router = APIRouter(prefix="/api/admin", tags=["Admin"])

@router.get("/dashboard-data")
def get_dashboard_data(user=Depends(require_roles("admin")), store: DocumentStore = Depends(get_db)):
    return JobService(store).dashboard_data()

@router.put("/jobcards/{job_id}/assign")
def assign_mechanic(job_id: str, payload: AssignMechanicModel, user=Depends(require_roles("admin")), store: DocumentStore = Depends(get_db)):
    job = JobService(store).assign_mechanic(job_id, payload.mechanicId)
    return {"message": "Mechanic assigned successfully.", "jobCard": job}
