"""
Session Store: the single upstream source of truth for who is signed in.

One store is owned per browser session (see views.get_session_store). Views
subscribe with on_session_change and hold the returned Subscription until they
are torn down.

Supabase Auth may call back from its token-refresh thread, so upstream events
are only queued here; dispatch_pending() delivers them on the script thread,
in arrival order, to every subscriber.
"""
import logging
from collections import deque
from enum import Enum
from typing import Callable, List, NamedTuple, Optional

from edulms.schemas.user import Identity

logger = logging.getLogger(__name__)

INITIAL_SESSION = "INITIAL_SESSION"
SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"
USER_UPDATED = "USER_UPDATED"


class SessionStatus(str, Enum):
    PENDING = "pending"
    AUTHENTICATED = "authenticated"
    SIGNED_OUT = "signed_out"
    UNAVAILABLE = "unavailable"


class SessionChange(NamedTuple):
    event: str
    identity: Optional[Identity]

    @property
    def signed_out(self) -> bool:
        return self.event == SIGNED_OUT


SessionHandler = Callable[[SessionChange], None]


class Subscription:
    """Cancellation handle returned by SessionStore.on_session_change."""

    def __init__(self, store: "SessionStore", handler: SessionHandler):
        self._store = store
        self.handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._store._remove(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.unsubscribe()


def _event_name(event) -> str:
    # gotrue passes plain strings; some versions pass an enum
    return str(getattr(event, "value", event))


class SessionStore:
    def __init__(self, auth_client):
        self._auth = auth_client
        self._identity: Optional[Identity] = None
        self._subscribers: List[Subscription] = []
        self._pending = deque()
        self._upstream = None
        self.status = SessionStatus.PENDING
        self.last_error: Optional[str] = None

    # ---------------------------------------------------------
    # BOOTSTRAP
    # ---------------------------------------------------------
    def _bootstrap(self) -> None:
        if self.status is not SessionStatus.PENDING:
            return

        try:
            session = self._auth.get_session()
        except Exception as e:
            # Reported to subscribers as "no identity"; status keeps the distinction
            logger.warning(f"[SESSION] Bootstrap failed, treating as signed out: {e}")
            self._identity = None
            self.status = SessionStatus.UNAVAILABLE
            self.last_error = str(e)
        else:
            self._identity = Identity.from_session(session)
            self.status = (
                SessionStatus.AUTHENTICATED if self._identity else SessionStatus.SIGNED_OUT
            )
            logger.info(f"[SESSION] Bootstrapped: {self.status.value}")

        if self._upstream is None:
            self._upstream = self._auth.on_auth_state_change(self._enqueue)

    # ---------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------
    def get_current_session(self) -> Optional[Identity]:
        self._bootstrap()
        return self._identity

    def on_session_change(self, handler: SessionHandler) -> Subscription:
        """
        Register a handler. It is called once right away with the current
        state, then once per transition until the subscription is released.
        """
        self._bootstrap()
        subscription = Subscription(self, handler)
        # A handler that fails on the initial state is never registered
        handler(SessionChange(INITIAL_SESSION, self._identity))
        self._subscribers.append(subscription)
        return subscription

    def dispatch_pending(self) -> int:
        """Deliver queued upstream events on the calling thread. Returns how many transitions fired."""
        delivered = 0
        while self._pending:
            event, session = self._pending.popleft()
            if self._apply(event, session):
                delivered += 1
        return delivered

    def sign_out(self) -> None:
        try:
            self._auth.sign_out()
        except Exception as e:
            logger.warning(f"[SESSION] sign_out failed upstream, clearing locally: {e}")
            self._enqueue(SIGNED_OUT, None)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def close(self) -> None:
        for subscription in list(self._subscribers):
            subscription.unsubscribe()
        if self._upstream is not None:
            self._upstream.unsubscribe()
            self._upstream = None

    # ---------------------------------------------------------
    # INTERNALS
    # ---------------------------------------------------------
    def _enqueue(self, event, session) -> None:
        self._pending.append((_event_name(event), session))

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscribers:
            self._subscribers.remove(subscription)

    def _apply(self, event: str, session) -> bool:
        identity = None if event == SIGNED_OUT else Identity.from_session(session)

        if identity is None and self._identity is None and self.status is SessionStatus.SIGNED_OUT:
            return False
        if event in (SIGNED_IN, INITIAL_SESSION) and identity is not None and identity.same_user(self._identity):
            self._identity = identity
            return False

        self._identity = identity
        self.status = SessionStatus.AUTHENTICATED if identity else SessionStatus.SIGNED_OUT
        self.last_error = None
        logger.info(f"[SESSION] {event} -> {self.status.value}")

        change = SessionChange(event, identity)
        for subscription in list(self._subscribers):
            if not subscription.active:
                continue
            try:
                subscription.handler(change)
            except Exception:
                logger.exception(f"[SESSION] Subscriber failed on {event}; delivering to the rest")
        return True
