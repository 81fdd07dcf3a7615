"""
Verify Email Use Case

Handles email verification via secure token.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return
from .dtos import VerifyEmailResponse


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must match a pending Verification row
    - Token must not be expired (24 hours from signup)
    - Sets email_verified = True on the user owning the email
    - Deletes the verification row (single-use)
    - Already verified users return success
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            token: Verification token from email link

        Returns:
            Result with verification status, or Error

        Errors:
            - INVALID_TOKEN: Token not found or user not found
            - TOKEN_EXPIRED: Token has expired (>24 hours)
        """
        async with self.uow:
            verification = await self.uow.verifications.get_by_value(token)
            if verification is None:
                return Return.err(
                    Error("INVALID_TOKEN", "Invalid or non-existent verification token")
                )

            user = await self.uow.users.get_by_email(verification.identifier)
            if user is None:
                return Return.err(
                    Error("INVALID_TOKEN", "Invalid or non-existent verification token")
                )

            if user.email_verified:
                await self.uow.verifications.delete(verification)
                await self.uow.commit()
                return Return.ok(
                    VerifyEmailResponse(
                        status="verified", message="Email is already verified"
                    )
                )

            now = utcnow()
            if now > verification.expires_at:
                return Return.err(
                    Error(
                        "TOKEN_EXPIRED",
                        "Verification token has expired. Please sign up again or request a new link.",
                    )
                )

            user.email_verified = True
            user.updated_at = now
            await self.uow.users.update(user)
            await self.uow.verifications.delete(verification)

            await self.uow.commit()

            return Return.ok(
                VerifyEmailResponse(
                    status="verified", message="Email successfully verified"
                )
            )
