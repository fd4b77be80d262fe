import logging
from typing import Optional

from edulms.api import DataStore
from edulms.profiles import PROFILES_TABLE
from edulms.schemas.user import Profile
from edulms.services.forms import require_fields, require_url

logger = logging.getLogger(__name__)


def save_profile_details(store: DataStore, profile: Profile, full_name: str, avatar_url: Optional[str]) -> None:
    """
    Update display fields only. The role column is never written from the client.
    """
    require_fields(full_name=full_name)
    avatar_url = (avatar_url or "").strip() or None
    if avatar_url:
        require_url("Avatar URL", avatar_url)

    patch = {"full_name": full_name.strip(), "avatar_url": avatar_url}
    store.update(PROFILES_TABLE, profile.id, patch)
    logger.info(f"[PROFILE] Display details updated for user {profile.user_id}")
