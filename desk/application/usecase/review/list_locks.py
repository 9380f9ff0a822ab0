"""List locks use case."""

from pydantic import BaseModel

from desk.application.usecase.dto import LockInfo
from desk.domain.error import PresenceUnavailableError
from desk.domain.service import PresenceRegistry


class ListLocksResponse(BaseModel):
    """List locks response."""

    connected: bool
    locks: list[LockInfo]


class ListLocksUseCase:
    """Use case for reading the current soft locks."""

    def __init__(self, presence_registry: PresenceRegistry) -> None:
        self.presence_registry = presence_registry

    async def execute(self) -> ListLocksResponse:
        """Execute list locks flow.

        An unreachable presence channel yields no locks.
        """
        try:
            locks = await self.presence_registry.snapshot()
        except PresenceUnavailableError:
            return ListLocksResponse(connected=False, locks=[])

        return ListLocksResponse(
            connected=True,
            locks=[
                LockInfo.from_domain(lock)
                for lock in sorted(locks.values(), key=lambda lock: lock.locked_at)
            ],
        )
