"""
Customer feedback feed.
"""

from ..config import get_settings
from ..models.review import ActivityFeed, Review

settings = get_settings()


class ActivityService:

    def __init__(self, store):
        self.store = store

    async def recent(self, limit: int = None) -> ActivityFeed:
        """Latest reviews, newest first, with positive/negative tallies."""
        docs = await self.store.find(
            "reviews",
            sort=[("time", -1)],
            limit=limit or settings.REVIEW_LIMIT
        )
        reviews = [Review(**doc) for doc in docs]
        positive = sum(1 for review in reviews if review.type == "positive")
        return ActivityFeed(
            reviews=reviews,
            positive=positive,
            negative=len(reviews) - positive,
            total=len(reviews)
        )
