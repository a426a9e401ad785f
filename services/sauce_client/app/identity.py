# services/sauce_client/app/identity.py
from typing import Optional, Protocol


class UserIdentity(Protocol):
    """Read-only accessor for the signed-in user, owned by the auth layer."""
    def get_user_id(self) -> Optional[str]: ...


class StaticIdentity:
    """Fixed user id, for scripts and tests."""
    def __init__(self, user_id: Optional[str]):
        self._user_id = user_id

    def get_user_id(self) -> Optional[str]:
        return self._user_id
