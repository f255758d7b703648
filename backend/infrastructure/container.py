# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from backend.application.services.password_hashing import BcryptPasswordHasher
from backend.application.services.tokens import JwtTokenService
from backend.application.use_cases.restaurants.restaurant_detail import (
    GetRestaurantDetailUseCase, ToggleScrapUseCase)
from backend.application.use_cases.reviews.list_reviews import (ListRestaurantReviewsUseCase,
                                                                ListUserReviewsUseCase)
from backend.application.use_cases.reviews.manage_review import (ChangeReviewUseCase,
                                                                 DeleteReviewUseCase,
                                                                 GetReviewUseCase,
                                                                 PostReviewUseCase)
from backend.application.use_cases.users.change_nickname import ChangeNicknameUseCase
from backend.application.use_cases.users.get_profile import GetProfileUseCase
from backend.application.use_cases.users.login_user import LoginUserUseCase
from backend.application.use_cases.users.register_user import RegisterUserUseCase
from backend.application.use_cases.users.update_profile_icon import UpdateProfileIconUseCase
from backend.infrastructure.db import SessionLocal
from backend.infrastructure.repositories.restaurants import (SqlAlchemyRestaurantRepository,
                                                             SqlAlchemyScrapRepository)
from backend.infrastructure.repositories.reviews import SqlAlchemyReviewRepository
from backend.infrastructure.repositories.users.sqlalchemy_account_repository import \
    SqlAlchemyAccountRepository
from backend.infrastructure.repositories.users.tag_allocator import SqlAlchemyTagAllocator
from backend.infrastructure.storage import LocalBlobStore
from backend.interfaces.http.controllers.auth_controller import AuthController
from backend.interfaces.http.controllers.misc_controller import MiscController
from backend.interfaces.http.controllers.profile_controller import ProfileController
from backend.interfaces.http.controllers.restaurants_controller import RestaurantsController
from backend.interfaces.http.controllers.reviews_controller import ReviewsController
from backend.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    # Services

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self._config.auth.bcrypt_rounds)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            self._config.auth.jwt_secret,
            ttl=timedelta(seconds=self._config.auth.token_ttl_seconds),
            algorithm=self._config.auth.jwt_algorithm,
        )

    @cached_property
    def blob_store(self) -> LocalBlobStore:
        return LocalBlobStore(
            self._config.blob_store.directory, self._config.blob_store.public_base_url
        )

    # Repositories

    @cached_property
    def account_repository(self) -> SqlAlchemyAccountRepository:
        return SqlAlchemyAccountRepository(SessionLocal)

    @cached_property
    def tag_allocator(self) -> SqlAlchemyTagAllocator:
        return SqlAlchemyTagAllocator(
            SessionLocal, attempts=self._config.auth.tag_allocation_attempts
        )

    @cached_property
    def review_repository(self) -> SqlAlchemyReviewRepository:
        return SqlAlchemyReviewRepository(SessionLocal)

    @cached_property
    def restaurant_repository(self) -> SqlAlchemyRestaurantRepository:
        return SqlAlchemyRestaurantRepository(SessionLocal)

    @cached_property
    def scrap_repository(self) -> SqlAlchemyScrapRepository:
        return SqlAlchemyScrapRepository(SessionLocal)

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            accounts=self.account_repository,
            tags=self.tag_allocator,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            accounts=self.account_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def list_user_reviews_use_case(self) -> ListUserReviewsUseCase:
        return ListUserReviewsUseCase(
            reviews=self.review_repository, page_size=self._config.reviews.page_size
        )

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def profile_controller(self) -> ProfileController:
        return ProfileController(
            get_profile_use_case=GetProfileUseCase(accounts=self.account_repository),
            change_nickname_use_case=ChangeNicknameUseCase(accounts=self.account_repository),
            update_icon_use_case=UpdateProfileIconUseCase(
                accounts=self.account_repository, blobs=self.blob_store
            ),
            max_upload_bytes=self._config.blob_store.max_upload_bytes,
        )

    @cached_property
    def reviews_controller(self) -> ReviewsController:
        return ReviewsController(
            list_use_case=self.list_user_reviews_use_case,
            get_use_case=GetReviewUseCase(reviews=self.review_repository),
            change_use_case=ChangeReviewUseCase(reviews=self.review_repository),
            delete_use_case=DeleteReviewUseCase(reviews=self.review_repository),
        )

    @cached_property
    def restaurants_controller(self) -> RestaurantsController:
        return RestaurantsController(
            detail_use_case=GetRestaurantDetailUseCase(restaurants=self.restaurant_repository),
            list_reviews_use_case=ListRestaurantReviewsUseCase(
                reviews=self.review_repository,
                restaurants=self.restaurant_repository,
                page_size=self._config.reviews.page_size,
            ),
            post_review_use_case=PostReviewUseCase(
                reviews=self.review_repository, restaurants=self.restaurant_repository
            ),
            toggle_scrap_use_case=ToggleScrapUseCase(
                restaurants=self.restaurant_repository, scraps=self.scrap_repository
            ),
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(media_root=self._config.blob_store.directory)


container = Container()
