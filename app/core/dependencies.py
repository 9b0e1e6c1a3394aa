from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.db.store import DataStore
from app.core.jwt import decode_access_token
from app.core.session import AuthSession
from app.models.admin import Admin

security = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> DataStore:
    return DataStore(db)


def get_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db)
) -> AuthSession:
    session = AuthSession.anonymous()
    if credentials is None:
        return session

    token = credentials.credentials  # Extract JWT token
    payload = decode_access_token(token)

    if not payload or "sub" not in payload or "role" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )

    if payload["role"] != "admin":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid role"
        )

    admin = db.query(Admin).filter(Admin.email == payload["sub"]).first()
    if not admin:
        raise HTTPException(status_code=404, detail="Admin not found")

    return session.login(admin, token)


def require_admin(session: AuthSession = Depends(get_session)) -> AuthSession:
    if not session.is_authenticated:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if not session.is_admin:
        raise HTTPException(status_code=403, detail="Admins only")
    return session
