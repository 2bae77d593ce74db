"""Post endpoints: public reads, authenticated create/update/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from blogapi.api.deps import get_post_service
from blogapi.api.responses import success
from blogapi.api.v1.auth import get_current_user
from blogapi.schemas.auth import CurrentUser
from blogapi.schemas.envelope import Envelope
from blogapi.schemas.post import PostCreate, PostRead, PostUpdate
from blogapi.services.posts import PostService

router = APIRouter()


@router.get("", response_model=Envelope[list[PostRead]])
def list_posts(
    request: Request,
    service: Annotated[PostService, Depends(get_post_service)],
) -> Envelope:
    """Published posts, most recently published first."""
    return success(request, status.HTTP_200_OK, "Posts retrieved successfully", service.list_posts())


@router.get("/me", response_model=Envelope[list[PostRead]])
def list_my_posts(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Envelope:
    """The caller's posts, drafts included."""
    posts = service.list_posts_by_user(current_user.id)
    return success(request, status.HTTP_200_OK, "My posts retrieved successfully", posts)


@router.get("/slug/{slug}", response_model=Envelope[PostRead])
def get_post_by_slug(
    request: Request,
    slug: str,
    service: Annotated[PostService, Depends(get_post_service)],
) -> Envelope:
    post = service.get_post_by_slug(slug)
    return success(request, status.HTTP_200_OK, "Post retrieved successfully", post)


@router.get("/{post_id}", response_model=Envelope[PostRead])
def get_post(
    request: Request,
    post_id: str,
    service: Annotated[PostService, Depends(get_post_service)],
) -> Envelope:
    post = service.get_post(post_id)
    return success(request, status.HTTP_200_OK, "Post retrieved successfully", post)


@router.post("", response_model=Envelope[PostRead], status_code=status.HTTP_201_CREATED)
def create_post(
    request: Request,
    body: PostCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Envelope:
    """Create a post owned by the caller. 409 SLUG_EXISTS if the slug is taken."""
    post = service.create_post(current_user.id, body)
    return success(request, status.HTTP_201_CREATED, "Post created successfully", post)


@router.patch("/{post_id}", response_model=Envelope[PostRead])
def update_post(
    request: Request,
    post_id: str,
    body: PostUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Envelope:
    """Partially update a post. 403 UNAUTHORIZED unless the caller owns it."""
    post = service.update_post(post_id, current_user.id, body)
    return success(request, status.HTTP_200_OK, "Post updated successfully", post)


@router.delete("/{post_id}", response_model=Envelope[None])
def delete_post(
    request: Request,
    post_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Envelope:
    """Soft-delete a post. 403 UNAUTHORIZED unless the caller owns it."""
    service.delete_post(post_id, current_user.id)
    return success(request, status.HTTP_200_OK, "Post deleted successfully")
