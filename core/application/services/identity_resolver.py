"""
Identity Resolver.

Finds or creates the account that owns a checkout. Runs inside the caller's
UnitOfWork and never touches order state.
"""
from dataclasses import dataclass
from typing import Optional
import logging

from core.application.dtos.checkout_dto import PlaceOrderRequest
from core.data.uow import UnitOfWork
from core.domain.entities.account import Account
from core.domain.enums import AccountStatus
from core.infrastructure.security import (
    hash_password,
    issue_session_token,
    placeholder_password_hash,
)
from core.settings.modules.auth_settings import AuthSettings


logger = logging.getLogger(__name__)


@dataclass
class ResolvedIdentity:
    """Account owning the order, plus a session token for freshly registered customers."""

    account: Account
    created: bool = False
    session_token: Optional[str] = None


class IdentityResolver:
    """
    Resolve the purchaser account.

    Order of lookup:
    1. Explicit account id (a stale id is treated as absent)
    2. Email (repeat guests reuse their account)
    3. Create a new account
    """

    def __init__(self, auth_settings: AuthSettings):
        self._auth = auth_settings

    async def resolve(self, uow: UnitOfWork, request: PlaceOrderRequest) -> ResolvedIdentity:
        """
        Resolve or create the account for a checkout.

        Args:
            uow: Open unit of work (identity is part of the order transaction)
            request: Normalized checkout request

        Returns:
            ResolvedIdentity

        Raises:
            Exception: Storage errors propagate and abort the transaction
        """
        execution_id = uow.execution_id

        if request.account_id is not None:
            account = await uow.accounts.get(request.account_id)
            if account is not None:
                logger.info(f"[{execution_id}] Using signed-in account {account.id}")
                return ResolvedIdentity(account=account)
            logger.warning(
                f"[{execution_id}] Account {request.account_id} not found, resolving by email"
            )

        account = await uow.accounts.find_by_email(request.email)
        if account is not None:
            logger.info(f"[{execution_id}] Reusing account {account.id} for {request.email}")
            return ResolvedIdentity(account=account)

        if request.create_account and request.password:
            password_hash = hash_password(request.password, self._auth.password_iterations)
        else:
            password_hash = placeholder_password_hash(self._auth.password_iterations)

        account = await uow.accounts.add(Account(
            email=request.email,
            name=request.full_name,
            password_hash=password_hash,
            phone=request.phone,
            status=AccountStatus.ACTIVE,
            newsletter_opt_in=request.newsletter_opt_in,
        ))
        logger.info(f"[{execution_id}] ✅ Created account {account.id} for {request.email}")

        token = None
        if request.create_account:
            token = issue_session_token(
                account.id,
                account.email,
                self._auth.session_secret,
                ttl_days=self._auth.session_ttl_days,
            )

        return ResolvedIdentity(account=account, created=True, session_token=token)
