from src.contest_api.access import AccessDeniedError, check_access, resolve_public_view
from src.contest_api.awards_service import AwardsService
from src.contest_api.contest import Contest

__all__ = [
    "AccessDeniedError",
    "AwardsService",
    "Contest",
    "check_access",
    "resolve_public_view",
]
