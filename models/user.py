# models/user.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base, value_enum


class UserRole(str, enum.Enum):
     """Roles issued by the identity provider."""
     ADMIN = "admin"
     TENANT = "tenant"


class User(Base):
     """
     User model - account that signs in to the dashboard.
     Owners are users with role 'admin'; every owned row points back here.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     full_name = Column(String(200), nullable=False)
     phone = Column(String(20), nullable=True)
     role = Column(value_enum(UserRole, "user_role"), default=UserRole.ADMIN, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     rooms = relationship("Room", back_populates="owner")

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
