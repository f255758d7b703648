# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from backend.application.services.pagination import parse_cursor
from backend.application.use_cases.restaurants.restaurant_detail import (
    GetRestaurantDetailUseCase, ToggleScrapUseCase)
from backend.application.use_cases.reviews.list_reviews import ListRestaurantReviewsUseCase
from backend.application.use_cases.reviews.manage_review import PostReviewUseCase
from backend.auth import auth_optional, auth_required, current_user_id, optional_user_id
from backend.interfaces.http.dto.reviews import (RestaurantDetailDTO, ReviewContentDTO,
                                                 ReviewDTO, ReviewPageDTO)
from backend.shared.errors.validation import raise_validation_error


class RestaurantsController:
    def __init__(
        self,
        *,
        detail_use_case: GetRestaurantDetailUseCase,
        list_reviews_use_case: ListRestaurantReviewsUseCase,
        post_review_use_case: PostReviewUseCase,
        toggle_scrap_use_case: ToggleScrapUseCase,
    ) -> None:
        self._detail = detail_use_case
        self._list_reviews = list_reviews_use_case
        self._post_review = post_review_use_case
        self._toggle_scrap = toggle_scrap_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("restaurants", __name__, url_prefix="/api/restaurants")
        bp.add_url_rule(
            "/<int:restaurant_id>",
            view_func=self.detail,
            methods=["GET"],
            endpoint="restaurant_detail",
        )
        bp.add_url_rule(
            "/<int:restaurant_id>/reviews",
            view_func=self.list_reviews,
            methods=["GET"],
            endpoint="restaurant_reviews",
        )
        bp.add_url_rule(
            "/<int:restaurant_id>/reviews",
            view_func=self.post_review,
            methods=["POST"],
            endpoint="restaurant_review_post",
        )
        bp.add_url_rule(
            "/<int:restaurant_id>/scrap",
            view_func=self.toggle_scrap,
            methods=["POST"],
            endpoint="restaurant_scrap",
        )
        return bp

    @auth_optional
    def detail(self, restaurant_id: int) -> tuple[Response, int]:
        detail = self._detail.execute(restaurant_id, optional_user_id())
        return jsonify(RestaurantDetailDTO.from_domain(detail).dump()), 200

    def list_reviews(self, restaurant_id: int) -> tuple[Response, int]:
        cursor = parse_cursor(request.args.get("cursor"))
        page = self._list_reviews.execute(restaurant_id, cursor)
        return jsonify(ReviewPageDTO.for_restaurant(page).dump()), 200

    @auth_required
    def post_review(self, restaurant_id: int) -> tuple[Response, int]:
        try:
            dto = ReviewContentDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        review = self._post_review.execute(current_user_id(), restaurant_id, dto.content)
        payload = {"success": True, "review": ReviewDTO.from_domain(review).model_dump(mode="json")}
        return jsonify(payload), 201

    @auth_required
    def toggle_scrap(self, restaurant_id: int) -> tuple[Response, int]:
        scrapped = self._toggle_scrap.execute(current_user_id(), restaurant_id)
        return jsonify({"success": True, "scrapped": scrapped}), 200
