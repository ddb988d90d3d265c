from fastapi import APIRouter, Depends
from database import DocumentStore, get_db
from auth import require_roles
from services.inventory import InventoryLedger

router = APIRouter(prefix="/api/inventory", tags=["Inventory"])

@router.get("/parts")
def list_parts(user=Depends(require_roles("mechanic", "admin")), store: DocumentStore = Depends(get_db)):
    return InventoryLedger(store).list()
