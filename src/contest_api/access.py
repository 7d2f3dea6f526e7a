"""Access rules for the awards endpoints."""

from datetime import datetime
from typing import Optional

from src.contest_api.contest import Contest


class AccessDeniedError(Exception):
    """Raised when the caller may not see the contest's awards."""

    pass


def resolve_public_view(is_jury: bool, public: Optional[bool] = None) -> bool:
    """
    Decide whether to compute awards from the public scoreboard.

    Non-jury callers always get the public view. Jury callers get the
    jury view unless they explicitly ask for the public one.
    """
    if not is_jury:
        return True
    if public is not None:
        return public
    return False


def check_access(
    contest: Contest, is_jury: bool, now: Optional[datetime] = None
) -> None:
    """
    Raise AccessDeniedError unless the caller may read this contest.

    Jury needs the contest enabled; everybody else needs it active.
    """
    allowed = contest.enabled if is_jury else contest.is_active(now)
    if not allowed:
        raise AccessDeniedError(
            f"Access to contest {contest.contest_id} denied"
        )
