# dependencies.py
"""
Request-scoped dependencies shared by the routers.

Tokens are issued by the identity provider; this module only verifies them
and works out whose rows the caller may see:
- admin: the owner; every query is filtered on owner_id == their user id
- tenant: filtered on the owner of their tenant record and on that record
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from config import settings
from database import get_session
from models import Tenant, UserRole


@dataclass(frozen=True)
class CurrentUser:
     id: int
     role: UserRole


@dataclass(frozen=True)
class Scope:
     """Row-ownership filter for the current caller."""
     user: CurrentUser
     owner_id: int
     tenant_id: Optional[int] = None

     @property
     def is_owner(self) -> bool:
          return self.user.role == UserRole.ADMIN


def create_access_token(user_id: int, role: UserRole) -> str:
     """Sign a token in the identity provider's format (used by tests and scripts)."""
     return jwt.encode(
          {"id": user_id, "role": UserRole(role).value},
          settings.JWT_SECRET,
          algorithm=settings.JWT_ALGORITHM,
     )


def verify_token(request: Request) -> CurrentUser:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ", 1)[1]
     try:
          payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")

     user_id = payload.get("id")
     try:
          role = UserRole(payload.get("role", UserRole.ADMIN.value))
     except ValueError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
     if not user_id:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
     return CurrentUser(id=int(user_id), role=role)


def get_scope(
     user: CurrentUser = Depends(verify_token),
     db: Session = Depends(get_session),
) -> Scope:
     if user.role == UserRole.ADMIN:
          return Scope(user=user, owner_id=user.id)

     tenant = db.query(Tenant).filter(Tenant.user_id == user.id).first()
     if tenant is None:
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="No tenant profile is linked to this account"
          )
     return Scope(user=user, owner_id=tenant.owner_id, tenant_id=tenant.id)


def require_owner(scope: Scope = Depends(get_scope)) -> Scope:
     if not scope.is_owner:
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="Only the property owner can perform this action"
          )
     return scope
