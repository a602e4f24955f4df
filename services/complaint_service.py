# services/complaint_service.py
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from models import Complaint, ComplaintPriority, ComplaintStatus, Room, Tenant
from utils.exceptions import InvalidTransitionError, NotFoundError

logger = logging.getLogger(__name__)

# Complaints only move forward
TRANSITIONS = {
     ComplaintStatus.OPEN: {ComplaintStatus.IN_PROGRESS, ComplaintStatus.RESOLVED},
     ComplaintStatus.IN_PROGRESS: {ComplaintStatus.RESOLVED},
     ComplaintStatus.RESOLVED: set(),
}


class ComplaintService:

     @staticmethod
     def get_complaint(db: Session, owner_id: int, complaint_id: int) -> Complaint:
          complaint = (
               db.query(Complaint)
               .filter(Complaint.id == complaint_id, Complaint.owner_id == owner_id)
               .first()
          )
          if complaint is None:
               raise NotFoundError(f"Complaint with ID {complaint_id} not found")
          return complaint

     @staticmethod
     def create_complaint(
          db: Session,
          owner_id: int,
          title: str,
          description: str,
          priority: ComplaintPriority = ComplaintPriority.MEDIUM,
          tenant_id: Optional[int] = None,
          room_id: Optional[int] = None,
     ) -> Complaint:
          """
          Log a complaint. When raised for a tenant without an explicit room,
          the tenant's current room is used.
          """
          if tenant_id is not None:
               tenant = (
                    db.query(Tenant)
                    .filter(Tenant.id == tenant_id, Tenant.owner_id == owner_id)
                    .first()
               )
               if tenant is None:
                    raise NotFoundError(f"Tenant with ID {tenant_id} not found")
               if room_id is None:
                    room_id = tenant.room_id
          if room_id is not None:
               room = db.query(Room).filter(Room.id == room_id, Room.owner_id == owner_id).first()
               if room is None:
                    raise NotFoundError(f"Room with ID {room_id} not found")

          complaint = Complaint(
               owner_id=owner_id,
               tenant_id=tenant_id,
               room_id=room_id,
               title=title.strip(),
               description=description.strip(),
               priority=priority,
               status=ComplaintStatus.OPEN,
          )
          db.add(complaint)
          db.flush()
          logger.info("Complaint %s opened for owner %s", complaint.id, owner_id)
          return complaint

     @staticmethod
     def list_complaints(
          db: Session,
          owner_id: int,
          status: Optional[ComplaintStatus] = None,
          priority: Optional[ComplaintPriority] = None,
          search: Optional[str] = None,
          tenant_id: Optional[int] = None,
     ) -> list:
          query = (
               db.query(Complaint)
               .outerjoin(Tenant, Complaint.tenant_id == Tenant.id)
               .outerjoin(Room, Complaint.room_id == Room.id)
               .filter(Complaint.owner_id == owner_id)
          )
          if tenant_id is not None:
               query = query.filter(Complaint.tenant_id == tenant_id)
          if status is not None:
               query = query.filter(Complaint.status == status)
          if priority is not None:
               query = query.filter(Complaint.priority == priority)
          if search:
               term = f"%{search}%"
               query = query.filter(or_(
                    Complaint.title.ilike(term),
                    Tenant.full_name.ilike(term),
                    Room.room_number.ilike(term),
               ))
          return query.order_by(desc(Complaint.created_at), desc(Complaint.id)).all()

     @staticmethod
     def update_status(
          db: Session,
          owner_id: int,
          complaint_id: int,
          new_status: ComplaintStatus,
     ) -> Complaint:
          """
          Raises:
               InvalidTransitionError: moving a complaint backwards
          """
          complaint = ComplaintService.get_complaint(db, owner_id, complaint_id)
          if complaint.status == new_status:
               return complaint
          if new_status not in TRANSITIONS[complaint.status]:
               raise InvalidTransitionError(
                    f"Cannot move complaint from {complaint.status.value} to {new_status.value}"
               )
          complaint.status = new_status
          if new_status == ComplaintStatus.RESOLVED:
               complaint.resolved_at = datetime.now(timezone.utc).replace(tzinfo=None)
          db.flush()
          return complaint
