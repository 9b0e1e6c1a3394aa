from typing import Optional
from pydantic import BaseModel, ConfigDict


class AuthSession(BaseModel):
    """Authentication state for one request.

    Sessions are immutable values: ``login`` and ``logout`` return a new
    session instead of mutating the current one, so handlers receive the
    session explicitly rather than reading shared state.
    """

    model_config = ConfigDict(frozen=True)

    admin_id: Optional[int] = None
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    token: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "AuthSession":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.email is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == "admin"

    def login(self, admin, token: str) -> "AuthSession":
        return self.model_copy(update={
            "admin_id": admin.id,
            "email": admin.email,
            "name": admin.name,
            "role": "admin",
            "token": token,
        })

    def logout(self) -> "AuthSession":
        return AuthSession.anonymous()
