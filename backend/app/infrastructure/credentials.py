"""Credential Lookup — static demo accounts behind the CredentialLookup protocol.

Invariants:
    - A match requires email, password and role to all be equal
    - Returned users never carry the password

Design Decisions:
    - Injected collaborator: the core and services never hold secrets
    - Demo accounts only; real identity providers plug in through the same protocol
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from app.core.entities import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoAccount:
    id: int
    name: str
    email: str
    password: str
    role: str
    department: str = "General"


DEMO_ACCOUNTS = (
    DemoAccount(1, "John Employee", "employee@demo.com", "password123", "employee"),
    DemoAccount(2, "Sarah L&D Manager", "ld@demo.com", "password123", "ld"),
    DemoAccount(3, "Admin User", "admin@demo.com", "password123", "admin"),
)


class StaticCredentialLookup:
    """Credential lookup over a fixed list of accounts."""

    def __init__(self, accounts: tuple[DemoAccount, ...] = DEMO_ACCOUNTS):
        self._accounts = accounts

    async def authenticate(
        self, email: str, password: str, role: str,
    ) -> User | None:
        for account in self._accounts:
            if (
                account.email == email
                and account.password == password
                and account.role == role
            ):
                return User(
                    id=account.id,
                    name=account.name,
                    email=account.email,
                    department=account.department,
                    role_id=0,
                    role=account.role,
                    created_at=datetime.now(timezone.utc),
                )
        logger.warning("Login rejected", extra={"email": email, "role": role})
        return None
