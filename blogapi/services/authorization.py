"""Ownership check gating post mutation."""

import logging

from blogapi.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


def ensure_post_owner(current_user_id: str, owner_id: str) -> None:
    """
    Allow the mutation only when the caller owns the post; otherwise raise UnauthorizedError.

    A non-owner gets 403 rather than 404, which reveals that the post exists.
    """
    if current_user_id != owner_id:
        logger.warning(
            "Ownership check failed: user_id=%s owner_id=%s", current_user_id, owner_id
        )
        raise UnauthorizedError()
