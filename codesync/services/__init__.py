"""Service layer helpers."""

from .activity import get_user_activity, merge_activities
from .contests import fetch_all_contests, order_contests, paginate
from .stats import get_cumulative_stats, merge_stats

__all__ = [
    "fetch_all_contests",
    "get_cumulative_stats",
    "get_user_activity",
    "merge_activities",
    "merge_stats",
    "order_contests",
    "paginate",
]
