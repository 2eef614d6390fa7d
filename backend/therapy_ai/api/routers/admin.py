# backend/therapy_ai/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, status

from therapy_ai.store import KeyValueStore, get_store
from therapy_ai.api.deps import admin_session
from therapy_ai.schemas import (
    PasswordResetResp, Therapist, TherapistCreate, TherapistRow, TherapistUpdate,
)
from therapy_ai.services.therapist_service import (
    create_therapist_account, edit_therapist_account, list_therapist_rows,
    remove_therapist_account, reset_therapist_password,
)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(admin_session)])


@router.get("", response_model=List[TherapistRow])
@router.get("/therapists", response_model=List[TherapistRow])
def list_therapists(store: KeyValueStore = Depends(get_store)):
    """Therapists with the number of children assigned to each."""
    return list_therapist_rows(store)


@router.post("/therapists", response_model=Therapist, status_code=status.HTTP_201_CREATED)
def add_therapist(req: TherapistCreate, store: KeyValueStore = Depends(get_store)):
    return create_therapist_account(store, req).unwrap()


@router.put("/therapists/{therapist_id}", response_model=Therapist)
def edit_therapist(therapist_id: str, req: TherapistUpdate, store: KeyValueStore = Depends(get_store)):
    return edit_therapist_account(store, therapist_id, req).unwrap()


@router.post("/therapists/{therapist_id}/reset-password", response_model=PasswordResetResp)
def reset_password(therapist_id: str, store: KeyValueStore = Depends(get_store)):
    new_password = reset_therapist_password(store, therapist_id).unwrap()
    return PasswordResetResp(therapist_id=therapist_id, password=new_password)


@router.delete("/therapists/{therapist_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_therapist(therapist_id: str, store: KeyValueStore = Depends(get_store)):
    remove_therapist_account(store, therapist_id).unwrap()
    return
