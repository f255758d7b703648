# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from backend.domain.restaurants.exceptions import RestaurantNotFoundError
from backend.domain.restaurants.repositories import RestaurantRepository
from backend.domain.reviews.entities import Review
from backend.domain.reviews.exceptions import ReviewNotFoundError, UnchangedReviewError
from backend.domain.reviews.repositories import ReviewRepository
from backend.shared.logging import logger


class GetReviewUseCase:
    def __init__(self, *, reviews: ReviewRepository) -> None:
        self._reviews = reviews

    def execute(self, review_id: int, owner_id: int) -> Review:
        review = self._reviews.get_owned(review_id, owner_id)
        if review is None:
            raise ReviewNotFoundError()
        return review


class ChangeReviewUseCase:
    def __init__(self, *, reviews: ReviewRepository) -> None:
        self._reviews = reviews

    def execute(self, review_id: int, owner_id: int, content: str) -> Review:
        current = self._reviews.get_owned(review_id, owner_id)
        if current is None:
            raise ReviewNotFoundError()
        if current.content == content:
            raise UnchangedReviewError()
        updated = self._reviews.update_content(review_id, owner_id, content)
        if updated is None:
            raise ReviewNotFoundError()
        logger.info(f"reviews.change: review_id={review_id} owner_id={owner_id}")
        return updated


class DeleteReviewUseCase:
    def __init__(self, *, reviews: ReviewRepository) -> None:
        self._reviews = reviews

    def execute(self, review_id: int, owner_id: int) -> None:
        if not self._reviews.delete(review_id, owner_id):
            raise ReviewNotFoundError()
        logger.info(f"reviews.delete: review_id={review_id} owner_id={owner_id}")


class PostReviewUseCase:
    def __init__(
        self, *, reviews: ReviewRepository, restaurants: RestaurantRepository
    ) -> None:
        self._reviews = reviews
        self._restaurants = restaurants

    def execute(self, owner_id: int, restaurant_id: int, content: str) -> Review:
        if not self._restaurants.exists(restaurant_id):
            raise RestaurantNotFoundError()
        review = self._reviews.add(owner_id, restaurant_id, content)
        logger.info(
            f"reviews.post: review_id={review.id} restaurant_id={restaurant_id} owner_id={owner_id}"
        )
        return review
