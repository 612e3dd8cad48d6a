from typing import Any, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentPrincipal, SessionDep
from app.models.common import BlogPostStatus
from app.schemas.blog_post import BlogPostCreate, BlogPostRead, BlogPostUpdate
from app.schemas.common import APIResponse
from app.services.blog import BlogPostService

router = APIRouter()


# Public routes
@router.get("/posts/published", response_model=APIResponse)
async def read_published_posts(
    *,
    session: SessionDep,
    tag: Optional[str] = None,
    sort: Optional[str] = Query(None, description="Field name, prefix with '-' for descending"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> Any:
    """
    Published posts, newest publication first.
    """
    posts, pagination = BlogPostService(session).list_published(page, limit, tag=tag, sort=sort)
    return APIResponse(
        data=[BlogPostRead.model_validate(post) for post in posts],
        pagination=pagination,
    )


@router.get("/posts/slug/{slug}", response_model=APIResponse)
async def read_post_by_slug(*, session: SessionDep, slug: str) -> Any:
    """
    Fetch a post by slug and count the view.
    """
    post = BlogPostService(session).read_by_slug(slug)
    return APIResponse(data=BlogPostRead.model_validate(post))


# Authenticated routes
@router.post("/posts", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    post_in: BlogPostCreate,
) -> Any:
    """
    Create a blog post authored by the calling user.

    Reading time is derived from the content; publishing on creation stamps
    ``published_at``. A slug already in use is rejected.
    """
    post = BlogPostService(session).create_post(post_in, current_user)
    return APIResponse(message="Blog post created successfully", data=BlogPostRead.model_validate(post))


@router.get("/posts", response_model=APIResponse)
async def read_posts(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    status: Optional[BlogPostStatus] = None,
    author: Optional[str] = None,
    tag: Optional[str] = None,
    sort: Optional[str] = Query(None, description="Field name, prefix with '-' for descending"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> Any:
    posts, pagination = BlogPostService(session).list(
        page, limit, status=status, author=author, tag=tag, sort=sort
    )
    return APIResponse(
        data=[BlogPostRead.model_validate(post) for post in posts],
        pagination=pagination,
    )


@router.get("/posts/{post_id}", response_model=APIResponse)
async def read_post(*, session: SessionDep, current_user: CurrentPrincipal, post_id: str) -> Any:
    post = BlogPostService(session).read(post_id)
    return APIResponse(data=BlogPostRead.model_validate(post))


@router.put("/posts/{post_id}", response_model=APIResponse)
async def update_post(
    *,
    session: SessionDep,
    current_user: CurrentPrincipal,
    post_id: str,
    post_in: BlogPostUpdate,
) -> Any:
    """
    Update a blog post. Only its author or an admin may do so.
    """
    service = BlogPostService(session)
    post = service.get_or_404(post_id)
    post = service.update_post(post, post_in, current_user)
    return APIResponse(message="Blog post updated successfully", data=BlogPostRead.model_validate(post))


@router.delete("/posts/{post_id}", response_model=APIResponse)
async def delete_post(*, session: SessionDep, current_user: CurrentPrincipal, post_id: str) -> Any:
    service = BlogPostService(session)
    post = service.get_or_404(post_id)
    service.delete_post(post, current_user)
    return APIResponse(message="Blog post deleted successfully")
