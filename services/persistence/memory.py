from __future__ import annotations

import threading
import time
from itertools import count
from typing import Any

from core.errors import ConflictError
from domain.models import (
    CommunityLoan,
    CreditAssessment,
    Document,
    FundingTransaction,
    LoanApplication,
    User,
    utcnow,
)


def application_number(app_id: int) -> str:
    return f"CF{int(time.time() * 1000)}{app_id}"


class MemoryStore:
    """Process-local store. Lists come back in insertion order; every map access holds the lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[int, User] = {}
        self._applications: dict[int, LoanApplication] = {}
        self._assessments: dict[int, CreditAssessment] = {}
        self._transactions: dict[int, FundingTransaction] = {}
        self._documents: dict[int, Document] = {}
        self._community_loans: dict[int, CommunityLoan] = {}
        self._ids = {
            name: count(1) for name in ("user", "app", "assessment", "tx", "doc", "community")
        }

    # users

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> User | None:
        with self._lock:
            return self._find_by_email(email)

    def _find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def create_user(self, fields: dict[str, Any]) -> User:
        with self._lock:
            if self._find_by_email(fields["email"]) is not None:
                raise ConflictError("User already exists")
            user = User(id=next(self._ids["user"]), **fields)
            self._users[user.id] = user
        return user

    def update_user(self, user_id: int, changes: dict[str, Any]) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            # password_hash is excluded from dumps, carry it over by hand
            user = User.model_validate(
                {**user.model_dump(), "password_hash": user.password_hash, **changes}
            )
            self._users[user_id] = user
        return user

    # loan applications

    def create_loan_application(self, fields: dict[str, Any]) -> LoanApplication:
        with self._lock:
            app_id = next(self._ids["app"])
            app = LoanApplication(
                id=app_id, application_number=application_number(app_id), **fields
            )
            self._applications[app_id] = app
        return app

    def get_loan_application(self, app_id: int) -> LoanApplication | None:
        with self._lock:
            return self._applications.get(app_id)

    def list_loan_applications(self, user_id: int) -> list[LoanApplication]:
        with self._lock:
            return [a for a in self._applications.values() if a.user_id == user_id]

    def update_loan_application(
        self, app_id: int, changes: dict[str, Any]
    ) -> LoanApplication | None:
        with self._lock:
            app = self._applications.get(app_id)
            if app is None:
                return None
            app = LoanApplication.model_validate(
                {**app.model_dump(), **changes, "updated_at": utcnow()}
            )
            self._applications[app_id] = app
        return app

    # credit assessments

    def create_credit_assessment(self, fields: dict[str, Any]) -> CreditAssessment:
        with self._lock:
            assessment = CreditAssessment(id=next(self._ids["assessment"]), **fields)
            self._assessments[assessment.id] = assessment
        return assessment

    def get_latest_credit_assessment(self, user_id: int) -> CreditAssessment | None:
        with self._lock:
            mine = [a for a in self._assessments.values() if a.user_id == user_id]
        if not mine:
            return None
        return max(mine, key=lambda a: (a.created_at, a.id))

    # funding transactions

    def create_funding_transaction(self, fields: dict[str, Any]) -> FundingTransaction:
        with self._lock:
            tx = FundingTransaction(id=next(self._ids["tx"]), **fields)
            self._transactions[tx.id] = tx
        return tx

    def list_funding_transactions(self, user_id: int) -> list[FundingTransaction]:
        with self._lock:
            return [t for t in self._transactions.values() if t.user_id == user_id]

    # documents

    def create_document(self, fields: dict[str, Any]) -> Document:
        with self._lock:
            doc = Document(id=next(self._ids["doc"]), **fields)
            self._documents[doc.id] = doc
        return doc

    def list_documents(self, user_id: int) -> list[Document]:
        with self._lock:
            return [d for d in self._documents.values() if d.user_id == user_id]

    # community loans

    def create_community_loan(self, fields: dict[str, Any]) -> CommunityLoan:
        with self._lock:
            loan = CommunityLoan(id=next(self._ids["community"]), **fields)
            self._community_loans[loan.id] = loan
        return loan

    def list_community_loans(self) -> list[CommunityLoan]:
        with self._lock:
            return list(self._community_loans.values())
