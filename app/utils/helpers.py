from collections.abc import MutableMapping
from datetime import UTC, datetime
from re import sub
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Match


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return the current local time as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime(
        "%Y-%m-%d %H:%M:%S",
    )


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def slugify(title: str) -> str:
    """
    Derive a URL slug from a blog title.

    Lowercases, drops everything outside ``[a-z0-9 -]``, turns whitespace
    runs into a single hyphen and trims leading/trailing hyphens.

    Examples
    --------
    >>> slugify("Hello World!")
    'hello-world'
    >>> slugify("  Rapat   Kerja -- 2024 ")
    'rapat-kerja-2024'
    """
    slug = title.lower()
    slug = sub(r"[^a-z0-9\s-]", "", slug)
    slug = sub(r"\s+", "-", slug)
    slug = sub(r"-+", "-", slug)
    return slug.strip("-")


def sanitize_filename(filename: str | None) -> str:
    """
    Reduce an uploaded filename to a safe stem for storage names.

    Examples
    --------
    >>> sanitize_filename("My Photo (1).JPG")
    'my-photo-1'
    >>> sanitize_filename(None)
    ''
    """
    if not filename:
        return ""
    stem = filename.rsplit("/", 1)[-1].rsplit("\\", 1)[-1]
    stem = stem.rsplit(".", 1)[0] if "." in stem else stem
    return slugify(stem)[:50].strip("-")


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    for route in routes:
        if isinstance(route, APIRoute) and route.matches(scope)[0] == Match.FULL:
            return route.summary
    return None
