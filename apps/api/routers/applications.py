from fastapi import APIRouter, Depends, status

from apps.api.deps import get_store
from domain.models import (
    FundingTransaction,
    FundingTransactionCreate,
    LoanApplication,
    LoanApplicationCreate,
    LoanApplicationUpdate,
)
from services.lending import workflows
from services.persistence.base import Store

router = APIRouter(prefix="/api", tags=["applications"])


@router.post(
    "/loan-applications", response_model=LoanApplication, status_code=status.HTTP_201_CREATED
)
def create_application(payload: LoanApplicationCreate, store: Store = Depends(get_store)):
    return workflows.submit_application(store, payload)


@router.get("/loan-applications/{application_id}", response_model=LoanApplication)
def get_application(application_id: int, store: Store = Depends(get_store)):
    return workflows.get_application(store, application_id)


@router.patch("/loan-applications/{application_id}", response_model=LoanApplication)
def update_application(
    application_id: int,
    payload: LoanApplicationUpdate,
    store: Store = Depends(get_store),
):
    return workflows.update_application(store, application_id, payload)


@router.post(
    "/funding-transactions",
    response_model=FundingTransaction,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(payload: FundingTransactionCreate, store: Store = Depends(get_store)):
    return workflows.record_transaction(store, payload)
