"""Customer-facing API schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class CustomerModel(BaseModel):
    id: str
    name: str
    phone: str
    address: str
    notes: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CustomerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    notes: str | None = None


class CustomerUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    phone: str | None = Field(default=None, min_length=1)
    address: str | None = Field(default=None, min_length=1)
    notes: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)


class SkippedRowModel(BaseModel):
    row: int
    missing: List[str]


class CustomerImportResponse(BaseModel):
    fileName: str
    imported: int
    skipped: List[SkippedRowModel]
