from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from backend.domain.restaurants.entities import RestaurantDetail
from backend.domain.reviews.entities import Review, ReviewPage, ReviewSummary

MAX_REVIEW_LENGTH = 2000


class ReviewContentDTO(BaseModel):
    content: str = Field(min_length=1, max_length=MAX_REVIEW_LENGTH)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class ReviewSummaryDTO(BaseModel):
    """Snake-case keys, matching what mobile clients already parse."""

    id: int
    restaurant_id: int
    restaurant_name: str
    content: str
    created_at: datetime
    # Always present in the payload, null when the restaurant has no label.
    label: str | None = None

    @classmethod
    def from_domain(cls, item: ReviewSummary) -> ReviewSummaryDTO:
        return cls(
            id=item.id,
            restaurant_id=item.restaurant_id,
            restaurant_name=item.restaurant_name,
            content=item.content,
            created_at=item.created_at,
            label=item.label,
        )


class RestaurantReviewDTO(BaseModel):
    id: int
    content: str
    created_at: datetime
    nickname: str | None
    tag: str | None

    @classmethod
    def from_domain(cls, item: ReviewSummary) -> RestaurantReviewDTO:
        return cls(
            id=item.id,
            content=item.content,
            created_at=item.created_at,
            nickname=item.author_nickname,
            tag=item.author_tag,
        )


class ReviewPageDTO(_CamelModel):
    success: bool = True
    reviews: Sequence[ReviewSummaryDTO | RestaurantReviewDTO]
    last_cursor: int | None

    @classmethod
    def for_user(cls, page: ReviewPage) -> ReviewPageDTO:
        return cls(
            reviews=[ReviewSummaryDTO.from_domain(item) for item in page.items],
            last_cursor=page.next_cursor,
        )

    @classmethod
    def for_restaurant(cls, page: ReviewPage) -> ReviewPageDTO:
        return cls(
            reviews=[RestaurantReviewDTO.from_domain(item) for item in page.items],
            last_cursor=page.next_cursor,
        )


class ReviewDTO(BaseModel):
    id: int
    restaurant_id: int
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, review: Review) -> ReviewDTO:
        return cls(
            id=review.id,
            restaurant_id=review.restaurant_id,
            content=review.content,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class ReviewChangedDTO(_CamelModel):
    success: bool = True
    message: str
    updated_at: datetime

    @field_serializer("updated_at")
    def _date_only(self, value: datetime) -> str:
        return value.date().isoformat()


class MenuDTO(_CamelModel):
    name: str
    price: int | None
    photo_url: str | None


class RestaurantDetailDTO(_CamelModel):
    id: int
    name: str
    labels: list[str]
    menus: list[MenuDTO]
    address: str | None
    opening_hours: str | None
    phone: str | None
    is_scrapped: bool

    @classmethod
    def from_domain(cls, detail: RestaurantDetail) -> RestaurantDetailDTO:
        return cls(
            id=detail.id,
            name=detail.name,
            labels=list(detail.labels),
            menus=[
                MenuDTO(name=menu.name, price=menu.price, photo_url=menu.photo_url)
                for menu in detail.menus
            ],
            address=detail.address,
            opening_hours=detail.opening_hours,
            phone=detail.phone,
            is_scrapped=detail.is_scrapped,
        )
