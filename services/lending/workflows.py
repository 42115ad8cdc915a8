"""
Request-level flows behind the API: registration, application intake and
the dashboard. Each step takes the store explicitly so tests can hand in a
fresh MemoryStore.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from passlib.context import CryptContext

from core.errors import AuthenticationError, NotFoundError
from domain.models import (
    ApplicationStatus,
    AssessmentType,
    CommunityLoan,
    CommunityLoanCreate,
    CreditAssessment,
    Dashboard,
    DashboardMetrics,
    Document,
    DocumentCreate,
    FundingTransaction,
    FundingTransactionCreate,
    LoanApplication,
    LoanApplicationCreate,
    LoanApplicationUpdate,
    ScoreResult,
    TransactionStatus,
    TransactionType,
    User,
    UserCreate,
    utcnow,
)
from domain.value_objects import Money
from services.observability.metrics import timing_metric
from services.persistence.base import Store
from services.scoring.credit_score import MIN_SCORE, compute_credit_score
from services.scoring.features import extract_profile
from services.scoring.policy import (
    assessment_valid_until,
    build_ai_assessment,
    interest_rate_for,
    status_for,
)

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ACTIVE_STATUSES = {ApplicationStatus.PENDING, ApplicationStatus.REVIEWING}
RECENT_LIMIT = 5
RECENT_DOCUMENTS_LIMIT = 3
CREDIT_PER_POINT = 5000


def score_user(user: User) -> ScoreResult:
    with timing_metric("credit_score"):
        return compute_credit_score(extract_profile(user))


def register_business(store: Store, payload: UserCreate) -> User:
    # the store owns e-mail uniqueness and raises ConflictError on a duplicate
    fields = payload.model_dump(exclude={"password"})
    fields["password_hash"] = pwd_context.hash(payload.password)
    user = store.create_user(fields)

    result = score_user(user)
    store.create_credit_assessment(
        {
            "user_id": user.id,
            "assessment_type": AssessmentType.AI_SCORING,
            "score": result.score,
            "factors": result.factors,
            "recommendations": [],
            "valid_until": assessment_valid_until(utcnow()),
        }
    )
    user = store.update_user(
        user.id, {"credit_score": result.score, "risk_level": result.risk_level}
    )
    logger.info("registered user %s score=%s risk=%s", user.id, result.score, result.risk_level.value)
    return user


def authenticate(store: Store, email: str, password: str) -> User:
    user = store.get_user_by_email(email)
    if user is None or not pwd_context.verify(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
    return user


def get_user(store: Store, user_id: int) -> User:
    user = store.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_application(store: Store, app_id: int) -> LoanApplication:
    app = store.get_loan_application(app_id)
    if app is None:
        raise NotFoundError("Application not found")
    return app


def get_latest_assessment(store: Store, user_id: int) -> CreditAssessment:
    assessment = store.get_latest_credit_assessment(user_id)
    if assessment is None:
        raise NotFoundError("No credit assessment found")
    return assessment


def submit_application(store: Store, payload: LoanApplicationCreate) -> LoanApplication:
    """Create the application, score its owner and price it in one go."""
    user = get_user(store, payload.user_id)

    app = store.create_loan_application(payload.model_dump())

    result = score_user(user)
    assessment = build_ai_assessment(
        result,
        requested=Money(payload.requested_amount, payload.currency),
        monthly_revenue=Money.parse(user.monthly_revenue),
    )
    app = store.update_loan_application(
        app.id,
        {
            "ai_assessment": assessment,
            "status": status_for(result.score),
            "interest_rate": interest_rate_for(result.score),
        },
    )
    logger.info(
        "application %s for user %s: score=%s status=%s",
        app.application_number,
        user.id,
        result.score,
        app.status.value,
    )
    return app


def update_application(store: Store, app_id: int, changes: LoanApplicationUpdate) -> LoanApplication:
    app = store.update_loan_application(app_id, changes.model_dump(exclude_unset=True))
    if app is None:
        raise NotFoundError("Application not found")
    return app


def record_transaction(store: Store, payload: FundingTransactionCreate) -> FundingTransaction:
    app = get_application(store, payload.application_id)
    return store.create_funding_transaction({**payload.model_dump(), "user_id": app.user_id})


def upload_document(store: Store, payload: DocumentCreate) -> Document:
    """Record document metadata; the file itself lives wherever fileUrl points."""
    get_user(store, payload.user_id)
    if payload.application_id is not None:
        app = get_application(store, payload.application_id)
        if app.user_id != payload.user_id:
            raise NotFoundError("Application not found")
    return store.create_document(payload.model_dump())


def list_documents(store: Store, user_id: int) -> list[Document]:
    return store.list_documents(user_id)


def create_community_loan(store: Store, payload: CommunityLoanCreate) -> CommunityLoan:
    get_user(store, payload.borrower_id)
    loan = store.create_community_loan(payload.model_dump())
    logger.info("community loan %s opened by user %s", loan.id, loan.borrower_id)
    return loan


def list_community_loans(store: Store) -> list[CommunityLoan]:
    return store.list_community_loans()


def build_dashboard(store: Store, user_id: int) -> Dashboard:
    user = get_user(store, user_id)
    applications = store.list_loan_applications(user_id)
    transactions = store.list_funding_transactions(user_id)
    documents = store.list_documents(user_id)

    active = sum(1 for a in applications if a.status in ACTIVE_STATUSES)
    total_funded = sum(
        (
            t.amount
            for t in transactions
            if t.transaction_type == TransactionType.DISBURSEMENT
            and t.status == TransactionStatus.COMPLETED
        ),
        Decimal("0"),
    )
    score = user.credit_score or 0
    available = (score - MIN_SCORE) * CREDIT_PER_POINT if user.credit_score else 0

    return Dashboard(
        user=user,
        metrics=DashboardMetrics(
            active_applications=active,
            total_funded=total_funded,
            credit_score=score,
            available_credit=available,
        ),
        recent_applications=applications[:RECENT_LIMIT],
        recent_documents=documents[:RECENT_DOCUMENTS_LIMIT],
        recent_transactions=transactions[:RECENT_LIMIT],
        credit_assessment=store.get_latest_credit_assessment(user_id),
    )
