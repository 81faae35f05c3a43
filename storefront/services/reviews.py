from __future__ import annotations

import logging
from typing import List, Optional

from storefront.api.store import StoreApi
from storefront.errors import StorefrontError, ValidationError
from storefront.models import Review
from storefront.notices import Notifier
from storefront.utils.validators import is_blank

logger = logging.getLogger(__name__)


def average_rating(reviews: List[Review]) -> float:
    if not reviews:
        return 0.0
    return sum(r.rating for r in reviews) / len(reviews)


def validate_review(rating: int, comment: str) -> None:
    if not rating or not 1 <= rating <= 5:
        raise ValidationError("Select a rating", "Choose between 1 and 5 stars.")
    if is_blank(comment):
        raise ValidationError("Add a comment", "A short comment helps other shoppers.")


class Reviews:
    def __init__(self, api: StoreApi, notifier: Notifier):
        self.api = api
        self.notifier = notifier

    def fetch(self, product_id: str) -> List[Review]:
        try:
            return self.api.fetch_product_reviews(product_id)
        except StorefrontError as e:
            logger.exception("Loading reviews for %s failed", product_id)
            self.notifier.error("Could not load reviews", str(e))
            return []

    def submit(self, product_id: str, rating: int, comment: str) -> Optional[Review]:
        try:
            validate_review(rating, comment)
        except ValidationError as e:
            self.notifier.error(e.title, e.description)
            return None
        try:
            review = self.api.create_review(product_id, rating, comment.strip())
        except StorefrontError as e:
            logger.exception("Review submission failed")
            self.notifier.error("Could not submit review", str(e))
            return None
        self.notifier.notify("Review submitted", "Thanks for sharing your thoughts.")
        return review
