"""Category service."""

import logging
import uuid

from blogapi.core.errors import CategoryNotFoundError, CategorySlugExistsError
from blogapi.models import Category
from blogapi.repositories.base import CategoryStore
from blogapi.schemas.category import CategoryCreate, CategoryRead

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, categories: CategoryStore) -> None:
        self.categories = categories

    def create_category(self, data: CategoryCreate) -> CategoryRead:
        if self.categories.find_category_by_slug(data.slug) is not None:
            raise CategorySlugExistsError()
        category = Category(id=str(uuid.uuid4()), name=data.name, slug=data.slug)
        self.categories.create_category(category)
        logger.info("Created category id=%s slug=%s", category.id, category.slug)
        return CategoryRead.model_validate(category)

    def get_category(self, category_id: str) -> CategoryRead:
        category = self.categories.find_category_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError()
        return CategoryRead.model_validate(category)

    def list_categories(self) -> list[CategoryRead]:
        return [CategoryRead.model_validate(c) for c in self.categories.list_categories()]
