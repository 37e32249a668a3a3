from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Worker


class UserRepository(Protocol):
    """Repository interface for workers.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def list_by_site(self, site_id: int, *, active_only: bool = True) -> Sequence[Worker]:
        raise NotImplementedError
