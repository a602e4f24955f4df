# routers/complaints.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Scope, get_scope, require_owner
from models import Complaint
from models.complaint import ComplaintPriority, ComplaintStatus
from schemas.complaint import ComplaintCreate, ComplaintResponse, ComplaintStatusUpdate
from services.complaint_service import ComplaintService

router = APIRouter(prefix="/api/complaints", tags=["complaints"])


@router.get("", response_model=list[ComplaintResponse], summary="List complaints")
def list_complaints(
     status_filter: Optional[ComplaintStatus] = Query(None, alias="status"),
     priority: Optional[ComplaintPriority] = Query(None),
     search: Optional[str] = Query(None, description="Title, tenant name or room number"),
     db: Session = Depends(get_session),
     scope: Scope = Depends(get_scope),
):
     complaints = ComplaintService.list_complaints(
          db,
          scope.owner_id,
          status=status_filter,
          priority=priority,
          search=search,
          tenant_id=None if scope.is_owner else scope.tenant_id,
     )
     return [build_complaint_response(c) for c in complaints]


@router.post(
     "",
     response_model=ComplaintResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Raise a complaint"
)
def create_complaint(
     body: ComplaintCreate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(get_scope),
):
     """Tenant logins always raise complaints for themselves and their room."""
     tenant_id, room_id = body.tenant_id, body.room_id
     if not scope.is_owner:
          tenant_id, room_id = scope.tenant_id, None

     complaint = ComplaintService.create_complaint(
          db,
          scope.owner_id,
          title=body.title,
          description=body.description,
          priority=body.priority,
          tenant_id=tenant_id,
          room_id=room_id,
     )
     return build_complaint_response(complaint)


@router.patch(
     "/{complaint_id}/status",
     response_model=ComplaintResponse,
     summary="Move a complaint forward"
)
def update_complaint_status(
     complaint_id: int,
     body: ComplaintStatusUpdate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     complaint = ComplaintService.update_status(db, scope.owner_id, complaint_id, body.status)
     return build_complaint_response(complaint)


def build_complaint_response(complaint: Complaint) -> ComplaintResponse:
     return ComplaintResponse(
          id=complaint.id,
          tenant_id=complaint.tenant_id,
          tenant_name=complaint.tenant.full_name if complaint.tenant else None,
          room_id=complaint.room_id,
          room_number=complaint.room.room_number if complaint.room else None,
          title=complaint.title,
          description=complaint.description,
          priority=complaint.priority,
          status=complaint.status,
          created_at=complaint.created_at,
          updated_at=complaint.updated_at,
          resolved_at=complaint.resolved_at,
     )
