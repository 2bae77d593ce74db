"""SQLAlchemy-backed category store."""

from sqlalchemy.orm import Session

from blogapi.models import Category
from blogapi.repositories.base import store_errors


class CategoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create_category(self, category: Category) -> None:
        with store_errors(self.session, "create_category"):
            self.session.add(category)
            self.session.commit()

    def find_category_by_id(self, category_id: str) -> Category | None:
        with store_errors(self.session, "find_category_by_id"):
            return (
                self.session.query(Category).filter(Category.id == category_id).first()
            )

    def find_category_by_slug(self, slug: str) -> Category | None:
        with store_errors(self.session, "find_category_by_slug"):
            return self.session.query(Category).filter(Category.slug == slug).first()

    def list_categories(self) -> list[Category]:
        """All categories ordered by name."""
        with store_errors(self.session, "list_categories"):
            return self.session.query(Category).order_by(Category.name).all()
