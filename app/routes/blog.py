# app/routes/blog.py

"""
Blog Routes.

Public reads and admin-only writes over the blog collection.

Summary
-------
Endpoints include:
  - List blog summaries
  - List the three most recent blogs (home page)
  - Get blog by id
  - Create blog (multipart, optional image)
  - Delete blog

Authentication
--------------
Create and delete require the ``token`` session cookie; a missing cookie
answers ``401`` and an invalid or expired one ``403``.
"""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.dependencies import BlogServiceDep, CurrentUserDep
from app.errors.blog import BlogNotFoundError
from app.monitoring import get_logger
from app.schemas import BlogPost, BlogSummary, ImageUpload, MessageResponse

router = APIRouter(tags=["📝 Blogs"])

logger = get_logger(__name__)

NOT_FOUND_RESPONSE = {
    "description": "Blog not found",
    "content": {"application/json": {"example": {"error": "blog 42 not found"}}},
}
AUTH_RESPONSES = {
    401: {
        "description": "No session cookie",
        "content": {
            "application/json": {"example": {"error": "authentication token not found"}},
        },
    },
    403: {
        "description": "Invalid or expired session",
        "content": {
            "application/json": {
                "example": {"error": "invalid or expired authentication token"},
            },
        },
    },
}


def parse_blog_id(raw: str) -> int:
    """
    Turn a path segment into a blog id.

    Blogs are addressed by numeric id only; anything else cannot match.
    """
    if not raw.isascii() or not raw.isdigit():
        raise BlogNotFoundError(raw)
    return int(raw)


async def read_image(image: UploadFile | None) -> ImageUpload | None:
    """Read an optional upload; an empty file part counts as no image."""
    if image is None:
        return None
    file_data = await image.read()
    if not file_data:
        return None
    return ImageUpload(
        file_data=file_data,
        content_type=image.content_type,
        filename=image.filename,
    )


@router.get(
    "/blogs",
    response_class=ORJSONResponse,
    response_model=list[BlogSummary],
    summary="List blogs",
    description="All blogs in stored order, without their content.",
    operation_id="list_blogs",
)
async def list_blogs(blog_service: BlogServiceDep) -> list[BlogSummary]:
    """
    List every blog as a summary.

    Returns
    -------
    list[BlogSummary]
        ``id, slug, title, author, created_at, image_url`` per blog.
    """
    return await blog_service.list_summaries()


@router.get(
    "/home/blogs",
    response_class=ORJSONResponse,
    response_model=list[BlogSummary],
    summary="List recent blogs",
    description="The three most recently created blogs, newest first.",
    operation_id="list_recent_blogs",
)
async def list_recent_blogs(blog_service: BlogServiceDep) -> list[BlogSummary]:
    return await blog_service.list_recent()


@router.get(
    "/blog/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogPost,
    summary="Get blog by id",
    responses={404: NOT_FOUND_RESPONSE},
    operation_id="get_blog",
)
async def get_blog(blog_id: str, blog_service: BlogServiceDep) -> BlogPost:
    """
    Retrieve a full blog.

    Parameters
    ----------
    blog_id : str
        Numeric blog id.

    Raises
    ------
    BlogNotFoundError
        If no blog has this id (404).
    """
    return await blog_service.get(parse_blog_id(blog_id))


@router.post(
    "/add/blog",
    response_class=ORJSONResponse,
    response_model=BlogPost,
    status_code=HTTP_201_CREATED,
    summary="Create blog",
    description="Create a blog from multipart form fields with an optional `image` file.",
    responses={
        400: {
            "description": "Missing fields or invalid image",
            "content": {
                "application/json": {
                    "example": {"error": "title, content and author are required"},
                },
            },
        },
        **AUTH_RESPONSES,
        413: {"description": "Image too large"},
        415: {"description": "Unsupported image type"},
        500: {"description": "Data store or image storage failure"},
    },
    operation_id="create_blog",
)
async def create_blog(
    blog_service: BlogServiceDep,
    current_user: CurrentUserDep,
    title: Annotated[str | None, Form()] = None,
    content: Annotated[str | None, Form()] = None,
    author: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> BlogPost:
    """
    Create a new blog.

    Parameters
    ----------
    blog_service : BlogService
        Blog service dependency.
    current_user : TokenData
        Verified session claims.
    title, content, author : str
        Required, non-blank form fields.
    image : UploadFile | None
        Optional JPEG, PNG, WebP or GIF image.

    Returns
    -------
    BlogPost
        The stored blog, with ``image_url`` null when no image was sent.
    """
    upload = await read_image(image)
    blog = await blog_service.create(title, content, author, upload)
    logger.info(f"Blog {blog.id} created by user {current_user.id}")
    return blog


@router.delete(
    "/blog/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete blog",
    responses={404: NOT_FOUND_RESPONSE, **AUTH_RESPONSES},
    operation_id="delete_blog",
)
async def delete_blog(
    blog_id: str,
    blog_service: BlogServiceDep,
    current_user: CurrentUserDep,
) -> MessageResponse:
    """
    Delete a blog and, best-effort, its image.

    Raises
    ------
    BlogNotFoundError
        If no blog has this id (404).
    """
    await blog_service.delete(parse_blog_id(blog_id))
    logger.info(f"Blog {blog_id} deleted by user {current_user.id}")
    return MessageResponse(message="Blog deleted successfully")
