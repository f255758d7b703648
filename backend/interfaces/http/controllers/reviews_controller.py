# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for the signed-in user's reviews."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from backend.application.services.pagination import parse_cursor
from backend.application.use_cases.reviews.list_reviews import ListUserReviewsUseCase
from backend.application.use_cases.reviews.manage_review import (ChangeReviewUseCase,
                                                                 DeleteReviewUseCase,
                                                                 GetReviewUseCase)
from backend.auth import auth_required, current_user_id
from backend.interfaces.http.dto.reviews import (ReviewChangedDTO, ReviewContentDTO, ReviewDTO,
                                                 ReviewPageDTO)
from backend.interfaces.http.dto.users import MessageDTO
from backend.shared.errors.validation import raise_validation_error


class ReviewsController:
    def __init__(
        self,
        *,
        list_use_case: ListUserReviewsUseCase,
        get_use_case: GetReviewUseCase,
        change_use_case: ChangeReviewUseCase,
        delete_use_case: DeleteReviewUseCase,
    ) -> None:
        self._list = list_use_case
        self._get = get_use_case
        self._change = change_use_case
        self._delete = delete_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("reviews", __name__, url_prefix="/api/reviews")
        bp.add_url_rule("", view_func=self.list_reviews, methods=["GET"], endpoint="reviews_list")
        bp.add_url_rule(
            "/<int:review_id>", view_func=self.get_review, methods=["GET"], endpoint="review_get"
        )
        bp.add_url_rule(
            "/<int:review_id>",
            view_func=self.change_review,
            methods=["PUT"],
            endpoint="review_change",
        )
        bp.add_url_rule(
            "/<int:review_id>",
            view_func=self.delete_review,
            methods=["DELETE"],
            endpoint="review_delete",
        )
        return bp

    @auth_required
    def list_reviews(self) -> tuple[Response, int]:
        cursor = parse_cursor(request.args.get("cursor"))
        page = self._list.execute(current_user_id(), cursor)
        return jsonify(ReviewPageDTO.for_user(page).dump()), 200

    @auth_required
    def get_review(self, review_id: int) -> tuple[Response, int]:
        review = self._get.execute(review_id, current_user_id())
        return jsonify(ReviewDTO.from_domain(review).model_dump(mode="json")), 200

    @auth_required
    def change_review(self, review_id: int) -> tuple[Response, int]:
        try:
            dto = ReviewContentDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        review = self._change.execute(review_id, current_user_id(), dto.content)
        payload = ReviewChangedDTO(message="Review updated", updated_at=review.updated_at)
        return jsonify(payload.dump()), 200

    @auth_required
    def delete_review(self, review_id: int) -> tuple[Response, int]:
        self._delete.execute(review_id, current_user_id())
        return jsonify(MessageDTO(message="Review deleted").model_dump()), 200
