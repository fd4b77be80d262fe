"""
Profile lookup and the SessionView base shared by the gate and the navbar.
"""
import logging
from typing import Optional

from pydantic import ValidationError

from edulms.api import DataStore, DataStoreError
from edulms.schemas.user import Identity, Profile, ProfileLookup, ProfileState
from edulms.session_store import SessionChange, SessionStore, Subscription

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


class ProfileResolver:
    """Point lookup of the role-bearing profile for an identity. No caching."""

    def __init__(self, data_store: DataStore):
        self._data_store = data_store

    def fetch_profile(self, identity_id: str) -> ProfileLookup:
        rows = self._data_store.select(
            PROFILES_TABLE,
            filters={"user_id": identity_id},
            limit=1,
        )
        if not rows:
            logger.info(f"[PROFILE] No profile row for user {identity_id}")
            return ProfileState.NOT_FOUND
        try:
            return Profile.model_validate(rows[0])
        except ValidationError as e:
            # e.g. a NULL or unknown role; the user is treated as having no role
            logger.warning(f"[PROFILE] Unusable profile row for user {identity_id}: {e.errors()[0]['msg']}")
            raise DataStoreError(PROFILES_TABLE, "select", "malformed profile row") from e


class SessionView:
    """
    Base for every component that follows the Session Store on its own.

    Each view keeps its own subscription and performs its own profile fetch.
    A fetch result is applied only if it answers the most recent notification
    and the view has not been closed.
    """

    name = "view"

    def __init__(self, resolver: ProfileResolver):
        self._resolver = resolver
        self._subscription: Optional[Subscription] = None
        self._ticket = 0
        self.closed = False
        self.change: Optional[SessionChange] = None
        self.profile: ProfileLookup = ProfileState.UNRESOLVED
        self.fetch_error: Optional[str] = None

    @property
    def identity(self) -> Optional[Identity]:
        return self.change.identity if self.change else None

    def attach(self, store: SessionStore) -> "SessionView":
        if self._subscription is None and not self.closed:
            self._subscription = store.on_session_change(self.handle_change)
        return self

    def close(self) -> None:
        self.closed = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def handle_change(self, change: SessionChange) -> None:
        ticket = self.begin(change)
        if change.identity is None:
            self.complete(ticket, ProfileState.UNRESOLVED)
            return
        self.complete(ticket, self.resolve(change.identity))

    def resolve(self, identity: Identity) -> ProfileLookup:
        try:
            lookup = self._resolver.fetch_profile(identity.id)
        except DataStoreError as e:
            logger.warning(f"[{self.name.upper()}] Profile fetch failed for {identity.id}: {e}")
            self.fetch_error = str(e)
            return ProfileState.UNRESOLVED
        self.fetch_error = None
        return lookup

    def begin(self, change: SessionChange) -> int:
        self._ticket += 1
        self.change = change
        self.profile = ProfileState.UNRESOLVED
        self.on_begin()
        return self._ticket

    def complete(self, ticket: int, lookup: ProfileLookup) -> bool:
        if self.closed:
            logger.debug(f"[{self.name.upper()}] Ignoring profile for closed view")
            return False
        if ticket != self._ticket:
            logger.debug(f"[{self.name.upper()}] Ignoring stale profile (ticket {ticket} != {self._ticket})")
            return False
        self.profile = lookup
        self.on_resolved()
        return True

    def on_begin(self) -> None:
        pass

    def on_resolved(self) -> None:
        pass
