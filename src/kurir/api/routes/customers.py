"""Customer endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status

from ...persistence import customers as customers_store
from ...schemas.customers import (
    CustomerCreateRequest,
    CustomerImportResponse,
    CustomerModel,
    CustomerUpdateRequest,
    SkippedRowModel,
)
from ...services.customers import UnsupportedFileError, parse_customer_file
from ..deps import get_current_user_id

router = APIRouter(prefix="/customers", tags=["customers"])

REQUIRED_FIELDS = ("name", "phone", "address")


def _to_model(customer) -> CustomerModel:
    return CustomerModel(**asdict(customer))


@router.get("", response_model=List[CustomerModel], status_code=status.HTTP_200_OK)
def list_customers(user_id: str = Depends(get_current_user_id)) -> List[CustomerModel]:
    return [_to_model(customer) for customer in customers_store.list_customers(user_id)]


@router.post("", response_model=CustomerModel, status_code=status.HTTP_201_CREATED)
def create_customer(payload: CustomerCreateRequest, user_id: str = Depends(get_current_user_id)) -> CustomerModel:
    fields = {
        "name": payload.name.strip(),
        "phone": payload.phone.strip(),
        "address": payload.address.strip(),
        "notes": (payload.notes or "").strip() or None,
    }
    missing = [name for name in REQUIRED_FIELDS if not fields[name]]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Required fields are empty: {', '.join(missing)}",
        )
    return _to_model(customers_store.create_customer(user_id, fields))


@router.post("/import", response_model=CustomerImportResponse, status_code=status.HTTP_201_CREATED)
async def import_customers(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
) -> CustomerImportResponse:
    """Bulk-create customers from a CSV or XLSX file with a header row."""
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Filename is required.")

    try:
        records, skipped = parse_customer_file(file.filename, await file.read())
    except UnsupportedFileError as exc:
        raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(exc)) from exc
    except (ValueError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    imported = customers_store.create_customers(user_id, records)
    return CustomerImportResponse(
        fileName=file.filename,
        imported=imported,
        skipped=[SkippedRowModel(**entry) for entry in skipped],
    )


@router.get("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def get_customer(customer_id: str, user_id: str = Depends(get_current_user_id)) -> CustomerModel:
    return _to_model(customers_store.get_customer(user_id, customer_id))


@router.patch("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def update_customer(
    customer_id: str,
    payload: CustomerUpdateRequest,
    user_id: str = Depends(get_current_user_id),
) -> CustomerModel:
    changes = payload.model_dump(exclude_unset=True)
    for name in ("name", "phone", "address", "notes"):
        if isinstance(changes.get(name), str):
            changes[name] = changes[name].strip()
    blank = [name for name in REQUIRED_FIELDS if name in changes and not changes[name]]
    if blank:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Required fields are empty: {', '.join(blank)}",
        )
    if "notes" in changes:
        changes["notes"] = changes["notes"] or None
    return _to_model(customers_store.update_customer(user_id, customer_id, changes))


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: str, user_id: str = Depends(get_current_user_id)) -> Response:
    customers_store.delete_customer(user_id, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
