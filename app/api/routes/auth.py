from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.dependencies import get_db, get_session, require_admin
from app.core.jwt import create_access_token
from app.core.logging_config import get_logger
from app.core.security import hash_password, verify_password
from app.core.session import AuthSession
from app.models.admin import Admin
from app.schemas.admin import AdminCreate, AdminLogin, AdminOut

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger()


# =====================================================================
#                           ADMIN REGISTER
# =====================================================================
@router.post("/admin/register")
def admin_register(data: AdminCreate, db: Session = Depends(get_db)):
    if db.query(Admin).filter(Admin.email == data.email).first():
        raise HTTPException(status_code=400, detail="Admin already exists")

    hashed = hash_password(data.password)
    admin = Admin(name=data.name, email=data.email, password_hash=hashed)

    db.add(admin)
    db.commit()

    logger.bind(log_type="admin").info(f"Admin registered | Email={data.email}")
    return {"message": "Admin registered successfully"}


# =====================================================================
#                           ADMIN LOGIN
# =====================================================================
@router.post("/admin/login")
def admin_login(data: AdminLogin, db: Session = Depends(get_db),
                session: AuthSession = Depends(get_session)):
    admin = db.query(Admin).filter(Admin.email == data.email).first()

    if not admin or not verify_password(data.password, admin.password_hash):
        logger.bind(log_type="admin").warning(f"Failed admin login | Email={data.email}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": admin.email, "role": "admin"})
    session = session.login(admin, token)

    return {
        "access_token": token,
        "role": session.role,
        "token_type": "bearer",
        "admin": AdminOut.model_validate(admin),
    }


# =====================================================================
#                           ADMIN LOGOUT
# =====================================================================
@router.post("/admin/logout")
def admin_logout(session: AuthSession = Depends(require_admin)):
    # Tokens are stateless; the client drops its copy
    email = session.email
    session = session.logout()

    logger.bind(log_type="admin").info(f"Admin logged out | Email={email}")
    return {"message": "Logged out", "authenticated": session.is_authenticated}


# =====================================================================
#                           CURRENT ADMIN
# =====================================================================
@router.get("/me")
def current_admin(session: AuthSession = Depends(require_admin)):
    return {
        "admin_id": session.admin_id,
        "email": session.email,
        "name": session.name,
        "role": session.role,
    }
