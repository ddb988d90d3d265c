from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext
from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
import logging

from config import settings
from database import DocumentStore, get_db

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login", auto_error=False)

def hash_password(password):
    return pwd_context.hash(password)

def verify_password(plain, hashed):
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # Stored value is not a recognised hash (e.g. a legacy plain-text entry).
        return False

def create_access_token(data: dict):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

def token_for_user(user: dict):
    return create_access_token({
        "sub": user["id"],
        "username": user["username"],
        "role": user["role"],
        "fullName": user.get("fullName"),
    })

def get_current_user(token: str = Depends(oauth2_scheme), store: DocumentStore = Depends(get_db)):
    from services.users import UserService
    if not token:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.debug("Rejected token: %s", e)
        raise HTTPException(status_code=401, detail="Invalid token.")
    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid token.")
    user = UserService(store).get_user(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found.")
    return user

def require_roles(*roles):
    """Dependency factory allowing only users whose role is in ``roles``."""
    def _role_dependency(user=Depends(get_current_user)):
        if user["role"] not in roles:
            raise HTTPException(
                status_code=403,
                detail="Forbidden. You do not have the required permissions.",
            )
        return user
    return _role_dependency
