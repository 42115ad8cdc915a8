from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    REVIEWING = "reviewing"
    APPROVED = "approved"
    REJECTED = "rejected"
    FUNDED = "funded"


class LoanType(str, Enum):
    WORKING_CAPITAL = "working_capital"
    SUPPLY_CHAIN = "supply_chain"
    COMMUNITY = "community"


class AssessmentType(str, Enum):
    AI_SCORING = "ai_scoring"
    MANUAL_REVIEW = "manual_review"


class TransactionType(str, Enum):
    DISBURSEMENT = "disbursement"
    REPAYMENT = "repayment"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# --- scoring output ---


class FactorScore(BaseModel):
    score: int
    weight: float


class ScoreResult(CamelModel):
    score: int
    factors: Dict[str, FactorScore]
    risk_level: RiskLevel


class AIAssessment(CamelModel):
    credit_score: int
    risk_level: RiskLevel
    recommended_amount: Decimal
    factors: Dict[str, FactorScore]
    confidence: str


# --- users ---


class UserCreate(CamelModel):
    email: str = Field(min_length=3, pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
    password: str = Field(min_length=6)
    business_name: str = Field(min_length=1)
    business_type: str = Field(min_length=1)
    contact_person: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    trade_license: Optional[str] = None
    established_year: Optional[int] = Field(default=None, ge=1800)
    employee_count: Optional[int] = Field(default=None, ge=0)
    monthly_revenue: Optional[Decimal] = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    preferred_language: str = "en"

    @field_validator("established_year")
    @classmethod
    def _not_in_future(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v > date.today().year:
            raise ValueError("established year cannot be in the future")
        return v


class User(CamelModel):
    id: int
    email: str
    password_hash: str = Field(default="", exclude=True)
    business_name: str
    business_type: str
    contact_person: str
    phone_number: str
    trade_license: Optional[str] = None
    established_year: Optional[int] = None
    employee_count: Optional[int] = None
    monthly_revenue: Optional[Decimal] = None
    is_verified: bool = False
    credit_score: Optional[int] = None
    risk_level: Optional[RiskLevel] = None
    preferred_language: str = "en"
    created_at: datetime = Field(default_factory=utcnow)


class LoginRequest(CamelModel):
    email: str
    password: str


# --- loan applications ---


class LoanApplicationCreate(CamelModel):
    user_id: int
    loan_type: LoanType
    requested_amount: Decimal = Field(gt=0, max_digits=15, decimal_places=2)
    currency: str = "AED"
    purpose: str = Field(min_length=1)
    repayment_term: Optional[int] = Field(default=None, gt=0)
    documents: Optional[List[Dict[str, Any]]] = None


class LoanApplicationUpdate(CamelModel):
    status: Optional[ApplicationStatus] = None
    interest_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    repayment_term: Optional[int] = Field(default=None, gt=0)
    purpose: Optional[str] = Field(default=None, min_length=1)
    documents: Optional[List[Dict[str, Any]]] = None
    approval_date: Optional[datetime] = None
    funding_date: Optional[datetime] = None

    @field_validator("status", "purpose")
    @classmethod
    def _not_null(cls, v: Any) -> Any:
        # may be left out, but not cleared
        if v is None:
            raise ValueError("cannot be null")
        return v


class LoanApplication(CamelModel):
    id: int
    user_id: int
    application_number: str
    loan_type: LoanType
    requested_amount: Decimal
    currency: str = "AED"
    purpose: str
    status: ApplicationStatus = ApplicationStatus.PENDING
    interest_rate: Optional[Decimal] = None
    repayment_term: Optional[int] = None
    documents: Optional[List[Dict[str, Any]]] = None
    ai_assessment: Optional[AIAssessment] = None
    approval_date: Optional[datetime] = None
    funding_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


# --- assessments & funding ---


class CreditAssessment(CamelModel):
    id: int
    user_id: int
    assessment_type: AssessmentType = AssessmentType.AI_SCORING
    score: int
    factors: Dict[str, FactorScore] = {}
    recommendations: List[str] = []
    valid_until: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)


class FundingTransactionCreate(CamelModel):
    application_id: int
    transaction_type: TransactionType
    amount: Decimal = Field(gt=0, max_digits=15, decimal_places=2)
    currency: str = "AED"
    status: TransactionStatus = TransactionStatus.PENDING
    reference_number: Optional[str] = None
    processing_fee: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class FundingTransaction(CamelModel):
    id: int
    application_id: int
    user_id: int
    transaction_type: TransactionType
    amount: Decimal
    currency: str = "AED"
    status: TransactionStatus = TransactionStatus.PENDING
    reference_number: Optional[str] = None
    processing_fee: Optional[Decimal] = None
    created_at: datetime = Field(default_factory=utcnow)


# --- documents ---


class DocumentStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class DocumentCreate(CamelModel):
    user_id: int
    application_id: Optional[int] = None
    document_type: str = Field(min_length=1)
    file_name: str = Field(min_length=1)
    file_url: str = Field(min_length=1)
    file_size: Optional[int] = Field(default=None, ge=0)


class Document(CamelModel):
    id: int
    user_id: int
    application_id: Optional[int] = None
    document_type: str
    file_name: str
    file_url: str
    file_size: Optional[int] = None
    status: DocumentStatus = DocumentStatus.PENDING
    upload_date: datetime = Field(default_factory=utcnow)


# --- community lending ---


class CommunityLoanStatus(str, Enum):
    OPEN = "open"
    FUNDED = "funded"
    REPAYING = "repaying"
    COMPLETED = "completed"


class CommunityLoanCreate(CamelModel):
    borrower_id: int
    amount: Decimal = Field(gt=0, max_digits=15, decimal_places=2)
    interest_rate: Decimal = Field(ge=0, max_digits=5, decimal_places=2)
    term: int = Field(gt=0)
    description: Optional[str] = None
    collateral: Optional[str] = None
    funding_target: Optional[Decimal] = Field(default=None, gt=0, max_digits=15, decimal_places=2)


class CommunityLoan(CamelModel):
    id: int
    borrower_id: int
    lender_id: Optional[int] = None
    amount: Decimal
    interest_rate: Decimal
    term: int
    status: CommunityLoanStatus = CommunityLoanStatus.OPEN
    description: Optional[str] = None
    collateral: Optional[str] = None
    funding_target: Optional[Decimal] = None
    funded_amount: Decimal = Decimal("0")
    created_at: datetime = Field(default_factory=utcnow)


# --- dashboard ---


class DashboardMetrics(CamelModel):
    active_applications: int
    total_funded: Decimal
    credit_score: int
    available_credit: int


class Dashboard(CamelModel):
    user: User
    metrics: DashboardMetrics
    recent_applications: List[LoanApplication]
    recent_documents: List[Document]
    recent_transactions: List[FundingTransaction]
    credit_assessment: Optional[CreditAssessment] = None
