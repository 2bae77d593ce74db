"""Category endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from blogapi.api.deps import get_category_service
from blogapi.api.responses import success
from blogapi.api.v1.auth import get_current_user
from blogapi.schemas.auth import CurrentUser
from blogapi.schemas.category import CategoryCreate, CategoryRead
from blogapi.schemas.envelope import Envelope
from blogapi.services.categories import CategoryService

router = APIRouter()


@router.get("", response_model=Envelope[list[CategoryRead]])
def list_categories(
    request: Request,
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> Envelope:
    """All categories ordered by name."""
    categories = service.list_categories()
    return success(request, status.HTTP_200_OK, "Categories retrieved successfully", categories)


@router.get("/{category_id}", response_model=Envelope[CategoryRead])
def get_category(
    request: Request,
    category_id: str,
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> Envelope:
    category = service.get_category(category_id)
    return success(request, status.HTTP_200_OK, "Category retrieved successfully", category)


@router.post("", response_model=Envelope[CategoryRead], status_code=status.HTTP_201_CREATED)
def create_category(
    request: Request,
    body: CategoryCreate,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> Envelope:
    category = service.create_category(body)
    return success(request, status.HTTP_201_CREATED, "Category created successfully", category)
