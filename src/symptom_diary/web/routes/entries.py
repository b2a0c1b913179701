"""Routes for diary entries."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError

from ...models.entry import parse_entry
from ...services import EntryStorage, EntryValidationError
from ..dependencies import get_storage

router = APIRouter()


@router.get("/")
async def list_entries(
    user_id: Optional[str] = Query(default=None),
    storage: EntryStorage = Depends(get_storage),
):
    """List stored entries, oldest first."""
    return [e.model_dump(mode="json") for e in storage.get_entries(user_id)]


@router.post("/", status_code=201)
async def create_entry(
    payload: dict = Body(...),
    storage: EntryStorage = Depends(get_storage),
):
    """Validate and store a diary entry."""
    try:
        entry = parse_entry(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        )

    try:
        storage.save_entry(entry)
    except EntryValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)

    return entry.model_dump(mode="json")


@router.get("/{entry_id}")
async def get_entry(
    entry_id: str,
    storage: EntryStorage = Depends(get_storage),
):
    entry = storage.get_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry.model_dump(mode="json")


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(
    entry_id: str,
    storage: EntryStorage = Depends(get_storage),
):
    """Delete an entry."""
    if not storage.delete_entry(entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")
