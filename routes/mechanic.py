from fastapi import APIRouter, Depends
from models import StatusUpdateModel, PartUsageModel
from database import DocumentStore, get_db
from auth import require_roles
from services.jobs import JobService

router = APIRouter(prefix="/api/mechanic", tags=["Mechanic"])

@router.get("/jobs")
def get_assigned_jobs(user=Depends(require_roles("mechanic")), store: DocumentStore = Depends(get_db)):
    return JobService(store).list_for_mechanic(user["id"])

@router.put("/jobs/{job_id}/status")
def update_job_status(job_id: str, payload: StatusUpdateModel, user=Depends(require_roles("mechanic")), store: DocumentStore = Depends(get_db)):
    job = JobService(store).update_status(job_id, user["id"], payload.status)
    return {"message": "Status updated.", "jobCard": job}

@router.put("/jobs/{job_id}/log-part")
def log_part(job_id: str, usage: PartUsageModel, user=Depends(require_roles("mechanic")), store: DocumentStore = Depends(get_db)):
    job = JobService(store).log_part_usage(job_id, user["id"], usage.partId, usage.quantityUsed)
    return {"message": "Part logged successfully.", "jobCard": job}
