from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import SignOutResponse


class SignOutUseCase:
    """Deletes the session behind a token. Signing out twice is not an error."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: Optional[str]) -> Result[SignOutResponse]:
        if token:
            async with self.uow:
                await self.uow.sessions.delete_by_token(token)
                await self.uow.commit()

        return Return.ok(SignOutResponse(status="success", message="Signed out"))
