# routers/tenants.py
"""
Tenant API routes - onboarding, details, status changes, room moves and
checkout. Owner-only, except that a tenant login may read its own record.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Scope, get_scope, require_owner
from models import Room, Tenant, TenantStatus
from schemas.tenant import (
     PastTenantResponse,
     TenantCheckout,
     TenantCreate,
     TenantListResponse,
     TenantResponse,
     TenantRoomUpdate,
     TenantStatusUpdate,
     TenantUpdate,
)
from services.tenant_service import TenantService, stay_duration

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


@router.get("", response_model=TenantListResponse, summary="List tenants")
def list_tenants(
     status: Optional[TenantStatus] = Query(None, description="Filter by status"),
     search: Optional[str] = Query(None, description="Name, email, phone or room number"),
     page: int = Query(1, ge=1, description="Page number"),
     page_size: int = Query(10, ge=1, le=100, description="Items per page"),
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     tenants, total = TenantService.list_tenants(
          db, scope.owner_id, status=status, search=search, page=page, page_size=page_size
     )
     return TenantListResponse(
          tenants=[build_tenant_response(t) for t in tenants],
          total=total,
          page=page,
          page_size=page_size,
     )


@router.get("/past", response_model=list[PastTenantResponse], summary="Checked-out tenants")
def list_past_tenants(
     search: Optional[str] = Query(None, description="Name or room number"),
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     tenants = TenantService.past_tenants(db, scope.owner_id, search=search)
     return [
          PastTenantResponse(
               **build_tenant_response(t).model_dump(),
               stay_duration=stay_duration(t.stay_start, t.check_out_date),
          )
          for t in tenants
     ]


@router.post(
     "",
     response_model=TenantResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Onboard a tenant"
)
def create_tenant(
     body: TenantCreate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     """
     Add a tenant to a room. The room must have a free bed and must not be
     under maintenance; its status is updated in the same transaction.
     """
     tenant = TenantService.create_tenant(db, owner_id=scope.owner_id, **body.model_dump())
     return build_tenant_response(tenant)


@router.get("/{tenant_id}", response_model=TenantResponse, summary="Get tenant by ID")
def get_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     scope: Scope = Depends(get_scope),
):
     if not scope.is_owner and scope.tenant_id != tenant_id:
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="You do not have permission to view this tenant"
          )
     tenant = TenantService.get_tenant(db, scope.owner_id, tenant_id)
     return build_tenant_response(tenant)


@router.put("/{tenant_id}", response_model=TenantResponse, summary="Update tenant details")
def update_tenant(
     tenant_id: int,
     body: TenantUpdate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     tenant = TenantService.update_details(
          db, scope.owner_id, tenant_id, **body.model_dump(exclude_unset=True)
     )
     return build_tenant_response(tenant)


@router.patch("/{tenant_id}/status", response_model=TenantResponse, summary="Change tenant status")
def change_tenant_status(
     tenant_id: int,
     body: TenantStatusUpdate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     """
     Allowed moves:
     - active -> notice_period, checked_out, inactive
     - notice_period -> active (needs a free bed), checked_out, inactive
     """
     tenant = TenantService.change_status(
          db, scope.owner_id, tenant_id, body.status, changed_by=scope.user.id
     )
     return build_tenant_response(tenant)


@router.patch("/{tenant_id}/room", response_model=TenantResponse, summary="Move tenant to another room")
def change_tenant_room(
     tenant_id: int,
     body: TenantRoomUpdate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     tenant = TenantService.assign_room(db, scope.owner_id, tenant_id, body.room_id)
     return build_tenant_response(tenant)


@router.post("/{tenant_id}/checkout", response_model=TenantResponse, summary="Check a tenant out")
def checkout_tenant(
     tenant_id: int,
     body: TenantCheckout,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     """
     Marks the tenant checked out, records the deposit returned and frees
     their bed. Deposit return status is derived: full, partial or none.
     """
     tenant = TenantService.checkout(
          db,
          scope.owner_id,
          tenant_id,
          check_out_date=body.check_out_date,
          deposit_return_amount=body.deposit_return_amount,
          checked_out_by=scope.user.id,
     )
     return build_tenant_response(tenant)


def build_tenant_response(tenant: Tenant) -> TenantResponse:
     """
     Helper function to build TenantResponse with the room number.
     """
     room: Optional[Room] = tenant.room
     return TenantResponse(
          id=tenant.id,
          room_id=tenant.room_id,
          room_number=room.room_number if room else None,
          full_name=tenant.full_name,
          email=tenant.email,
          phone=tenant.phone,
          join_date=tenant.join_date,
          check_in_date=tenant.check_in_date,
          check_out_date=tenant.check_out_date,
          status=tenant.status,
          deposit_amount=tenant.deposit_amount,
          deposit_return_amount=tenant.deposit_return_amount,
          deposit_return_status=tenant.deposit_return_status,
          id_proof_url=tenant.id_proof_url,
          agreement_url=tenant.agreement_url,
          created_at=tenant.created_at,
     )
