"""Tests for the request logging middleware."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, Request, Response
from structlog.contextvars import get_contextvars

from app.middleware.middleware import LoggingMiddleware
from app.monitoring import clear_context


def make_request(request_id: str) -> Request:
    return Request(
        {
            "type": "http",
            "app": FastAPI(),
            "method": "GET",
            "path": "/blogs",
            "headers": [(b"x-request-id", request_id.encode())],
            "query_string": b"",
            "client": ("127.0.0.1", 5000),
            "server": ("test", 443),
            "scheme": "https",
        },
    )


class TestLoggingMiddleware:
    def setup_method(self) -> None:
        clear_context()

    @pytest.mark.asyncio
    async def test_request_id_echoed_and_context_cleared(self) -> None:
        async def call_next(request: Request) -> Response:
            assert get_contextvars()["request_id"] == "req-1"
            return Response("ok")

        response = await LoggingMiddleware(app=MagicMock()).dispatch(
            make_request("req-1"),
            call_next,
        )

        assert response.headers["X-Request-ID"] == "req-1"
        assert "request_id" not in get_contextvars()

    @pytest.mark.asyncio
    async def test_context_cleared_when_downstream_raises(self) -> None:
        async def call_next(request: Request) -> Response:
            raise RuntimeError("handler blew up")

        with pytest.raises(RuntimeError, match="handler blew up"):
            await LoggingMiddleware(app=MagicMock()).dispatch(
                make_request("req-2"),
                call_next,
            )

        assert "request_id" not in get_contextvars()
