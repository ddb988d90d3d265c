from fastapi import APIRouter, Depends, HTTPException
from models import UserCreate, UserLogin
from database import DocumentStore, get_db
from auth import require_roles, token_for_user
from services.users import UserService, public_user

router = APIRouter(prefix="/api/auth", tags=["Auth"])

@router.post("/login")
def login(credentials: UserLogin, store: DocumentStore = Depends(get_db)):
    if not credentials.username or not credentials.password:
        raise HTTPException(status_code=400, detail="Username and password are required.")
    user = UserService(store).authenticate(credentials.username, credentials.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials.")
    return {"message": "Login successful!", "token": token_for_user(user), "user": public_user(user)}

# Admins register mechanics and customers; there is no self sign-up.
@router.post("/register", status_code=201)
def register(user: UserCreate, admin=Depends(require_roles("admin")), store: DocumentStore = Depends(get_db)):
    user_id = UserService(store).register_user(user.username, user.password, user.fullName, user.mobile, user.role)
    return {"message": "User registered successfully.", "userId": user_id}
