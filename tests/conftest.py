"""
Shared fixtures: a throwaway JSON document with a few users and parts,
the services built on it, and an API client wired to the same file.
"""

import pytest
from fastapi.testclient import TestClient

from auth import token_for_user
from database import DocumentStore, get_db
from main import app
from services.inventory import InventoryLedger
from services.jobs import JobService
from services.users import UserService


ADMIN = {"id": "u-admin", "username": "admin", "password": "", "fullName": "Ada Admin", "mobile": "000", "role": "admin"}
MECHANIC_A = {"id": "u-mech-a", "username": "mecha", "password": "", "fullName": "Max Mechanic", "mobile": "111", "role": "mechanic"}
MECHANIC_B = {"id": "u-mech-b", "username": "mechb", "password": "", "fullName": "Bea Mechanic", "mobile": "222", "role": "mechanic"}
CUSTOMER = {"id": "u-cust", "username": "carl", "password": "", "fullName": "Carl Customer", "mobile": "555-0101", "role": "customer"}


@pytest.fixture
def store(tmp_path):
    store = DocumentStore(tmp_path / "db.json")
    store.save({
        "users": [dict(u) for u in (ADMIN, MECHANIC_A, MECHANIC_B, CUSTOMER)],
        "jobCards": [],
        "parts": [
            {"id": "p1", "partName": "Filter", "quantity": 5},
            {"id": "p2", "partName": "Brake Pad", "quantity": 10},
        ],
    })
    return store


@pytest.fixture
def jobs(store):
    return JobService(store)


@pytest.fixture
def ledger(store):
    return InventoryLedger(store)


@pytest.fixture
def users(store):
    return UserService(store)


@pytest.fixture
def assigned_job(jobs):
    """A job from the customer already handed to mechanic A."""
    job = jobs.create_request(CUSTOMER["id"], "KA-01-1234", "Oil leak")
    jobs.assign_mechanic(job["id"], MECHANIC_A["id"])
    return job


@pytest.fixture
def client(store):
    app.dependency_overrides[get_db] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_header(user):
    return {"Authorization": f"Bearer {token_for_user(user)}"}


@pytest.fixture
def admin_headers():
    return auth_header(ADMIN)


@pytest.fixture
def mechanic_headers():
    return auth_header(MECHANIC_A)


@pytest.fixture
def other_mechanic_headers():
    return auth_header(MECHANIC_B)


@pytest.fixture
def customer_headers():
    return auth_header(CUSTOMER)
