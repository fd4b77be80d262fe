from pydantic import BaseModel
from typing import Optional, Union
from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"


class Identity(BaseModel):
    """
    Authenticated user handle issued by Supabase Auth.
    Only the fields the front end reads are kept.
    """
    id: str
    email: Optional[str] = None
    access_token: Optional[str] = None

    @classmethod
    def from_session(cls, session) -> Optional["Identity"]:
        if session is None:
            return None
        user = getattr(session, "user", None)
        if user is None or not getattr(user, "id", None):
            return None
        return cls(
            id=str(user.id),
            email=getattr(user, "email", None),
            access_token=getattr(session, "access_token", None),
        )

    def same_user(self, other: Optional["Identity"]) -> bool:
        return other is not None and other.id == self.id


class Profile(BaseModel):
    """One row of the `profiles` table, keyed by the auth user id."""
    id: str
    user_id: str
    full_name: Optional[str] = None
    role: Role = Role.STUDENT
    avatar_url: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def display_name(self) -> str:
        return self.full_name or "Student"

    @property
    def initial(self) -> Optional[str]:
        return self.full_name[0] if self.full_name else None


class ProfileState(str, Enum):
    UNRESOLVED = "unresolved"
    NOT_FOUND = "not_found"


ProfileLookup = Union[Profile, ProfileState]


def role_of(lookup: ProfileLookup) -> Optional[Role]:
    if isinstance(lookup, Profile):
        return lookup.role
    return None
