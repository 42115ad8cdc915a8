from typing import List

from fastapi import APIRouter, Depends, status

from apps.api.deps import get_store
from domain.models import CreditAssessment, Dashboard, LoanApplication, LoginRequest, User, UserCreate
from services.lending import workflows
from services.persistence.base import Store

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, store: Store = Depends(get_store)):
    return workflows.register_business(store, payload)


@router.post("/login", response_model=User)
def login(payload: LoginRequest, store: Store = Depends(get_store)):
    return workflows.authenticate(store, payload.email, payload.password)


@router.get("/{user_id}", response_model=User)
def get_user(user_id: int, store: Store = Depends(get_store)):
    return workflows.get_user(store, user_id)


@router.get("/{user_id}/loan-applications", response_model=List[LoanApplication])
def list_loan_applications(user_id: int, store: Store = Depends(get_store)):
    return store.list_loan_applications(user_id)


@router.get("/{user_id}/credit-assessment", response_model=CreditAssessment)
def get_credit_assessment(user_id: int, store: Store = Depends(get_store)):
    return workflows.get_latest_assessment(store, user_id)


@router.get("/{user_id}/dashboard", response_model=Dashboard)
def get_dashboard(user_id: int, store: Store = Depends(get_store)):
    return workflows.build_dashboard(store, user_id)
