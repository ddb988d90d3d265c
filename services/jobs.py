"""
Job card lifecycle.

A job card is created by a customer (``Pending``), handed to a mechanic
by an admin (``Assigned``) and then moved by that mechanic through
``In Progress``, ``Ready for Dispatch`` and ``Dispatched``. The mechanic
also logs the parts used, which draws down stock through the
``InventoryLedger``.

Every mutation runs inside one store transaction: if any check fails
the document is not written and nothing changes.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from database import DocumentStore
from errors import Forbidden, NotFound, ValidationError
from services.inventory import InventoryLedger
from services.users import find_user

logger = logging.getLogger(__name__)

PENDING = "Pending"
ASSIGNED = "Assigned"
IN_PROGRESS = "In Progress"
READY_FOR_DISPATCH = "Ready for Dispatch"
DISPATCHED = "Dispatched"

# Statuses a mechanic may set. Any of them can follow any other.
MECHANIC_STATUSES = (IN_PROGRESS, READY_FOR_DISPATCH, DISPATCHED)


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def find_job(document: dict, job_id: str) -> Optional[dict]:
    return next((j for j in document["jobCards"] if j.get("id") == job_id), None)


def _full_name(user: Optional[dict]) -> str:
    return user.get("fullName") or "N/A" if user else "N/A"


def _blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


class JobService:
    def __init__(self, store: DocumentStore, ledger: Optional[InventoryLedger] = None):
        self.store = store
        self.ledger = ledger or InventoryLedger(store)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_request(self, customer_id: str, vehicle_plate: str, issue_description: str) -> dict:
        """Open a new job card for a customer's vehicle."""
        if _blank(vehicle_plate) or _blank(issue_description):
            raise ValidationError("Vehicle number plate and issue description are required.")

        job = {
            "id": str(uuid.uuid4()),
            "customerId": customer_id,
            "vehicleNumberPlate": vehicle_plate.strip(),
            "issueDescription": issue_description.strip(),
            "status": PENDING,
            "assignedMechanicId": None,
            "partsUsed": [],
            "createdDate": utcnow_iso(),
        }
        with self.store.transaction() as document:
            document["jobCards"].append(job)

        logger.info("Job %s created for customer %s", job["id"], customer_id)
        return job

    def assign_mechanic(self, job_id: str, mechanic_id: str) -> dict:
        """Hand a job to a mechanic, replacing any previous assignee."""
        with self.store.transaction() as document:
            job = find_job(document, job_id)
            if job is None:
                raise NotFound("Job card not found.", {"job_id": job_id})
            mechanic = find_user(document, mechanic_id)
            if mechanic is None or mechanic.get("role") != "mechanic":
                raise NotFound("Mechanic not found.", {"mechanic_id": mechanic_id})

            job["assignedMechanicId"] = mechanic_id
            job["status"] = ASSIGNED
            enriched = dict(
                job,
                customerName=_full_name(find_user(document, job["customerId"])),
                mechanicName=_full_name(mechanic),
            )

        logger.info("Job %s assigned to mechanic %s", job_id, mechanic_id)
        return enriched

    def _job_for_mechanic(self, document: dict, job_id: str, requester_id: str) -> dict:
        job = find_job(document, job_id)
        if job is None:
            raise NotFound("Job card not found.", {"job_id": job_id})
        if job.get("assignedMechanicId") != requester_id:
            logger.warning("Mechanic %s tried to change job %s", requester_id, job_id)
            raise Forbidden("You are not assigned to this job.", {"job_id": job_id})
        return job

    def update_status(self, job_id: str, requester_id: str, new_status: str) -> dict:
        """Set a mechanic-controlled status on a job assigned to the requester.

        Transitions are not ordered; ``Dispatched`` also records the
        dispatch time.
        """
        if new_status not in MECHANIC_STATUSES:
            raise ValidationError("Invalid or missing status.", {"status": new_status})

        with self.store.transaction() as document:
            job = self._job_for_mechanic(document, job_id, requester_id)
            job["status"] = new_status
            if new_status == DISPATCHED:
                job["dispatchedDate"] = utcnow_iso()

        logger.info("Job %s moved to %s by %s", job_id, new_status, requester_id)
        return job

    def log_part_usage(self, job_id: str, requester_id: str, part_id: str, quantity: int) -> dict:
        """Record parts used on a job and take them out of stock.

        Entries for the same part are merged. The part name is copied at
        logging time and is not refreshed if the part is renamed later.
        """
        if (
            _blank(part_id)
            or isinstance(quantity, bool)
            or not isinstance(quantity, int)
            or quantity <= 0
        ):
            raise ValidationError("Valid Part ID and positive quantity are required.")

        with self.store.transaction() as document:
            job = self._job_for_mechanic(document, job_id, requester_id)
            part = self.ledger.consume(part_id, quantity, document)

            entry = next((p for p in job["partsUsed"] if p["partId"] == part_id), None)
            if entry is not None:
                entry["quantity"] += quantity
            else:
                job["partsUsed"].append(
                    {"partId": part_id, "partName": part["partName"], "quantity": quantity}
                )

        logger.info("Job %s: logged %d x %s", job_id, quantity, part_id)
        return job

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def list_for_customer(self, customer_id: str) -> List[dict]:
        document = self.store.load()
        return [
            {
                "jobId": job["id"],
                "vehicle": job["vehicleNumberPlate"],
                "issue": job["issueDescription"],
                "status": job["status"],
                "created": job["createdDate"],
            }
            for job in document["jobCards"]
            if job.get("customerId") == customer_id
        ]

    def list_for_mechanic(self, mechanic_id: str) -> List[dict]:
        document = self.store.load()
        jobs = []
        for job in document["jobCards"]:
            if job.get("assignedMechanicId") != mechanic_id:
                continue
            customer = find_user(document, job.get("customerId"))
            jobs.append(dict(
                job,
                customerName=_full_name(customer),
                customerMobile=customer.get("mobile") or "N/A" if customer else "N/A",
            ))
        return jobs

    def list_all_with_names(self, document: Optional[dict] = None) -> List[dict]:
        if document is None:
            document = self.store.load()
        return [
            dict(
                job,
                customerName=_full_name(find_user(document, job.get("customerId"))),
                mechanicName=_full_name(find_user(document, job.get("assignedMechanicId"))),
            )
            for job in document["jobCards"]
        ]

    def dashboard_data(self) -> dict:
        """Everything the admin dashboard shows, read from one snapshot."""
        document = self.store.load()
        mechanics = [
            {"id": u["id"], "fullName": u.get("fullName")}
            for u in document["users"]
            if u.get("role") == "mechanic"
        ]
        return {
            "jobCards": self.list_all_with_names(document),
            "mechanics": mechanics,
            "parts": document["parts"],
        }
