from typing import List

from fastapi import APIRouter, Depends, status

from apps.api.deps import get_store
from domain.models import Document, DocumentCreate
from services.lending import workflows
from services.persistence.base import Store

router = APIRouter(prefix="/api", tags=["documents"])


@router.post("/documents", response_model=Document, status_code=status.HTTP_201_CREATED)
def upload_document(payload: DocumentCreate, store: Store = Depends(get_store)):
    return workflows.upload_document(store, payload)


@router.get("/users/{user_id}/documents", response_model=List[Document])
def list_documents(user_id: int, store: Store = Depends(get_store)):
    return workflows.list_documents(store, user_id)
