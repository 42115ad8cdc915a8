from typing import List

from fastapi import APIRouter, Depends, status

from apps.api.deps import get_store
from domain.models import CommunityLoan, CommunityLoanCreate
from services.lending import workflows
from services.persistence.base import Store

router = APIRouter(prefix="/api/community-loans", tags=["community-loans"])


@router.post("", response_model=CommunityLoan, status_code=status.HTTP_201_CREATED)
def create_community_loan(payload: CommunityLoanCreate, store: Store = Depends(get_store)):
    return workflows.create_community_loan(store, payload)


@router.get("", response_model=List[CommunityLoan])
def list_community_loans(store: Store = Depends(get_store)):
    return workflows.list_community_loans(store)
