from __future__ import annotations

from typing import Any, Protocol

from domain.models import (
    CommunityLoan,
    CreditAssessment,
    Document,
    FundingTransaction,
    LoanApplication,
    User,
)


class Store(Protocol):
    """Storage surface shared by MemoryStore and PostgresStore."""

    def get_user(self, user_id: int) -> User | None: ...

    def get_user_by_email(self, email: str) -> User | None: ...

    def create_user(self, fields: dict[str, Any]) -> User: ...

    def update_user(self, user_id: int, changes: dict[str, Any]) -> User | None: ...

    def create_loan_application(self, fields: dict[str, Any]) -> LoanApplication: ...

    def get_loan_application(self, app_id: int) -> LoanApplication | None: ...

    def list_loan_applications(self, user_id: int) -> list[LoanApplication]: ...

    def update_loan_application(
        self, app_id: int, changes: dict[str, Any]
    ) -> LoanApplication | None: ...

    def create_credit_assessment(self, fields: dict[str, Any]) -> CreditAssessment: ...

    def get_latest_credit_assessment(self, user_id: int) -> CreditAssessment | None: ...

    def create_funding_transaction(self, fields: dict[str, Any]) -> FundingTransaction: ...

    def list_funding_transactions(self, user_id: int) -> list[FundingTransaction]: ...

    def create_document(self, fields: dict[str, Any]) -> Document: ...

    def list_documents(self, user_id: int) -> list[Document]: ...

    def create_community_loan(self, fields: dict[str, Any]) -> CommunityLoan: ...

    def list_community_loans(self) -> list[CommunityLoan]: ...
