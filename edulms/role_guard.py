"""
Authorization Gate: per-page admission on top of the Session Store.

The gate is advisory UI routing only. Row-level security on the Supabase
tables is what actually protects the data.
"""
import logging
from enum import Enum
from typing import NamedTuple, Optional

from edulms.navigation import Navigator
from edulms.profiles import ProfileResolver, SessionView
from edulms.schemas.user import Identity, ProfileLookup, Role, role_of

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    LOADING = "loading"
    ADMITTED = "admitted"
    REDIRECTING = "redirecting"


class PagePolicy(NamedTuple):
    route: str
    requires_identity: bool = True
    required_role: Optional[Role] = None
    unauthenticated_route: str = "/auth"
    forbidden_route: str = "/dashboard"
    signed_out_route: str = "/"


POLICIES = {
    "/dashboard": PagePolicy("/dashboard"),
    "/admin": PagePolicy("/admin", required_role=Role.ADMIN),
    "/profile": PagePolicy("/profile"),
}


class Decision(NamedTuple):
    admitted: bool
    redirect_to: Optional[str] = None


def admission(
    identity: Optional[Identity],
    profile: ProfileLookup,
    policy: PagePolicy,
    signed_out: bool = False,
) -> Decision:
    """
    Pure admission check. A missing or unresolved profile counts as "no role".
    """
    if identity is None:
        if not policy.requires_identity:
            return Decision(True)
        return Decision(
            False,
            policy.signed_out_route if signed_out else policy.unauthenticated_route,
        )

    if policy.required_role is not None and role_of(profile) is not policy.required_role:
        return Decision(False, policy.forbidden_route)

    return Decision(True)


class AuthorizationGate(SessionView):
    name = "gate"

    def __init__(self, policy: PagePolicy, resolver: ProfileResolver, navigator: Navigator):
        super().__init__(resolver)
        self.policy = policy
        self._navigator = navigator
        self.state = GateState.LOADING
        self.redirect_to: Optional[str] = None

    @property
    def admitted(self) -> bool:
        return self.state is GateState.ADMITTED

    def on_begin(self) -> None:
        self.state = GateState.LOADING
        self.redirect_to = None

    def on_resolved(self) -> None:
        decision = admission(
            self.identity,
            self.profile,
            self.policy,
            signed_out=bool(self.change and self.change.signed_out),
        )
        if decision.admitted:
            self.state = GateState.ADMITTED
            logger.info(f"[GATE] {self.policy.route}: admitted")
            return

        self.state = GateState.REDIRECTING
        self.redirect_to = decision.redirect_to
        logger.info(f"[GATE] {self.policy.route}: redirecting to {decision.redirect_to}")
        self._navigator.request(decision.redirect_to)
