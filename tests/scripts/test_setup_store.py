"""Tests for the store setup script."""

from pathlib import Path

import orjson
import pytest
from httpx import MockTransport, Request, Response

from app.clients import JsonBinDocumentStore, LocalDocumentStore
from app.configs import Settings
from app.managers import PasswordHasher
from auto.setup_store import AdminUserData, main, setup_store

ADMIN = AdminUserData(username="admin", password="Secret123")


class TestSetupStore:
    @pytest.mark.asyncio
    async def test_creates_document_with_admin(self, tmp_path: Path) -> None:
        store = LocalDocumentStore(tmp_path / "blog.json")

        document = await setup_store(store, ADMIN)

        stored = orjson.loads((tmp_path / "blog.json").read_bytes())
        assert stored["blogs"] == []
        assert [user["username"] for user in stored["users"]] == ["admin"]
        assert PasswordHasher().verify("Secret123", document.users[0].password)

    @pytest.mark.asyncio
    async def test_existing_admin_left_alone(self, tmp_path: Path) -> None:
        store = LocalDocumentStore(tmp_path / "blog.json")
        first = await setup_store(store, ADMIN)

        second = await setup_store(store, AdminUserData("admin", "Other456"))

        assert second.users[0].password == first.users[0].password

    @pytest.mark.asyncio
    async def test_force_replaces_password(self, tmp_path: Path) -> None:
        store = LocalDocumentStore(tmp_path / "blog.json")
        await setup_store(store, ADMIN)

        await setup_store(store, AdminUserData("admin", "Other456"), force=True)

        reloaded = await store.load()
        assert len(reloaded.users) == 1
        assert PasswordHasher().verify("Other456", reloaded.users[0].password)

    @pytest.mark.asyncio
    async def test_creates_jsonbin_bin_when_unset(self) -> None:
        seen: list[Request] = []

        def handler(request: Request) -> Response:
            seen.append(request)
            return Response(200, json={"record": {}, "metadata": {"id": "fresh-bin"}})

        store = JsonBinDocumentStore(None, "master-key", transport=MockTransport(handler))

        await setup_store(store, ADMIN)
        await store.close()

        assert store.bin_id == "fresh-bin"
        assert seen[0].method == "POST"
        body = orjson.loads(seen[0].content)
        assert body["blogs"] == []
        assert body["users"][0]["username"] == "admin"

    @pytest.mark.asyncio
    async def test_existing_bin_is_updated_in_place(self) -> None:
        seen: list[Request] = []

        def handler(request: Request) -> Response:
            seen.append(request)
            if request.method == "GET":
                return Response(200, json={"blogs": [], "users": []})
            return Response(200, json={"record": {}, "metadata": {"parentId": "existing-bin"}})

        store = JsonBinDocumentStore("existing-bin", "master-key", transport=MockTransport(handler))

        await setup_store(store, ADMIN)
        await store.close()

        calls = [(request.method, request.url.path) for request in seen]
        assert calls == [("GET", "/v3/b/existing-bin/latest"), ("PUT", "/v3/b/existing-bin")]
        assert store.bin_id == "existing-bin"
        assert orjson.loads(seen[1].content)["users"][0]["username"] == "admin"

    @pytest.mark.asyncio
    async def test_reset_overwrites_existing_bin(self) -> None:
        seen: list[Request] = []

        def handler(request: Request) -> Response:
            seen.append(request)
            return Response(200, json={"record": {}, "metadata": {"parentId": "existing-bin"}})

        store = JsonBinDocumentStore("existing-bin", "master-key", transport=MockTransport(handler))

        await setup_store(store, ADMIN, reset=True)
        await store.close()

        assert [(request.method, request.url.path) for request in seen] == [
            ("PUT", "/v3/b/existing-bin"),
        ]


class TestMain:
    @pytest.mark.asyncio
    async def test_main_with_arguments(self, settings: Settings) -> None:
        code = await main(["--username", "root", "--password", "pw"], settings=settings)

        assert code == 0
        stored = orjson.loads(settings.DATA_FILE.read_bytes())
        assert stored["users"][0]["username"] == "root"

    @pytest.mark.asyncio
    async def test_main_reports_store_failure(self, settings: Settings) -> None:
        settings.DATA_FILE.parent.mkdir(parents=True, exist_ok=True)
        settings.DATA_FILE.write_text("corrupt")

        code = await main(["--password", "pw"], settings=settings)

        assert code == 1
