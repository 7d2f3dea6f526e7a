from src.awards_engine.calculator import AwardsCalculator
from src.awards_engine.models import AwardNotFoundError, AwardRecord

__all__ = ["AwardNotFoundError", "AwardRecord", "AwardsCalculator"]
