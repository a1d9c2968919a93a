# tests/clients/test_document_store.py
"""Tests for the local and JSONBin document stores."""

from pathlib import Path

import orjson
import pytest
from httpx import MockTransport, Request, Response

from app.clients import JsonBinDocumentStore, LocalDocumentStore, build_document_store
from app.clients.document_store import parse_document
from app.clients.protocols import DocumentStoreProtocol
from app.configs import Settings
from app.errors import DocumentStoreError
from app.schemas import BlogPost, Document

BIN_ID = "65f0c0ffee0000000000beef"


def make_document() -> Document:
    return Document(
        blogs=[BlogPost(id=1, title="Hello", slug="hello", content="Body", author="Admin")],
    )


class TestParseDocument:
    """Tests for parse_document."""

    def test_parses_plain_document(self) -> None:
        raw = b'{"blogs": [], "users": []}'
        document = parse_document(raw, "test")
        assert document.blogs == []
        assert document.users == []

    def test_unwraps_jsonbin_record(self) -> None:
        raw = orjson.dumps({"record": {"blogs": [], "users": []}, "metadata": {}})
        document = parse_document(raw, "test")
        assert document.blogs == []

    def test_missing_arrays_default_to_empty(self) -> None:
        document = parse_document(b"{}", "test")
        assert document.blogs == []
        assert document.users == []

    def test_keeps_unknown_top_level_keys(self) -> None:
        document = parse_document(b'{"blogs": [], "users": [], "settings": {"theme": "dark"}}', "t")
        assert document.model_dump()["settings"] == {"theme": "dark"}

    @pytest.mark.parametrize(
        "raw",
        [b"not json", b"[1, 2, 3]", b'{"blogs": "nope"}'],
    )
    def test_rejects_malformed_payloads(self, raw: bytes) -> None:
        with pytest.raises(DocumentStoreError):
            parse_document(raw, "test")


class TestLocalDocumentStore:
    """Tests for LocalDocumentStore."""

    def test_conforms_to_protocol(self, tmp_path: Path) -> None:
        assert isinstance(LocalDocumentStore(tmp_path / "blog.json"), DocumentStoreProtocol)

    @pytest.mark.asyncio
    async def test_missing_file_loads_empty_document(self, tmp_path: Path) -> None:
        store = LocalDocumentStore(tmp_path / "nothing-here.json")
        document = await store.load()
        assert document.blogs == []
        assert document.users == []

    @pytest.mark.asyncio
    async def test_save_then_load(self, tmp_path: Path) -> None:
        store = LocalDocumentStore(tmp_path / "nested" / "blog.json")

        await store.save(make_document())
        loaded = await store.load()

        assert [blog.title for blog in loaded.blogs] == ["Hello"]
        assert not (tmp_path / "nested" / "blog.json.tmp").exists()

    @pytest.mark.asyncio
    async def test_save_replaces_whole_document(self, tmp_path: Path) -> None:
        store = LocalDocumentStore(tmp_path / "blog.json")
        await store.save(make_document())

        await store.save(Document())

        assert (await store.load()).blogs == []

    @pytest.mark.asyncio
    async def test_corrupt_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "blog.json"
        path.write_text("{ this is not json")
        store = LocalDocumentStore(path)

        with pytest.raises(DocumentStoreError):
            await store.load()

    @pytest.mark.asyncio
    async def test_unwritable_location_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = LocalDocumentStore(blocker / "blog.json")

        with pytest.raises(DocumentStoreError) as exc_info:
            await store.save(Document())
        assert exc_info.value.operation == "save"

    @pytest.mark.asyncio
    async def test_initialize_writes_and_returns_path(self, tmp_path: Path) -> None:
        path = tmp_path / "blog.json"
        store = LocalDocumentStore(path)

        location = await store.initialize(Document())

        assert location == str(path)
        assert orjson.loads(path.read_bytes()) == {"blogs": [], "users": []}


class TestJsonBinDocumentStore:
    """Tests for JsonBinDocumentStore against a mocked JSONBin API."""

    @pytest.mark.asyncio
    async def test_load_fetches_latest_without_metadata(self) -> None:
        seen: list[Request] = []

        def handler(request: Request) -> Response:
            seen.append(request)
            return Response(200, content=orjson.dumps(make_document().model_dump(mode="json")))

        store = JsonBinDocumentStore(BIN_ID, "master-key", transport=MockTransport(handler))
        document = await store.load()
        await store.close()

        assert [blog.id for blog in document.blogs] == [1]
        assert seen[0].method == "GET"
        assert seen[0].url.path == f"/v3/b/{BIN_ID}/latest"
        assert seen[0].headers["X-Master-Key"] == "master-key"
        assert seen[0].headers["X-Bin-Meta"] == "false"

    @pytest.mark.asyncio
    async def test_save_puts_whole_document(self) -> None:
        seen: list[Request] = []

        def handler(request: Request) -> Response:
            seen.append(request)
            return Response(200, json={"record": {}, "metadata": {"parentId": BIN_ID}})

        store = JsonBinDocumentStore(BIN_ID, "master-key", transport=MockTransport(handler))
        await store.save(make_document())
        await store.close()

        assert seen[0].method == "PUT"
        assert seen[0].url.path == f"/v3/b/{BIN_ID}"
        body = orjson.loads(seen[0].content)
        assert body["blogs"][0]["title"] == "Hello"
        assert body["users"] == []

    @pytest.mark.asyncio
    async def test_http_error_on_load_raises(self) -> None:
        store = JsonBinDocumentStore(
            BIN_ID,
            "master-key",
            transport=MockTransport(lambda request: Response(503)),
        )
        with pytest.raises(DocumentStoreError):
            await store.load()
        await store.close()

    @pytest.mark.asyncio
    async def test_http_error_on_save_raises(self) -> None:
        store = JsonBinDocumentStore(
            BIN_ID,
            "master-key",
            transport=MockTransport(lambda request: Response(401, json={"message": "bad key"})),
        )
        with pytest.raises(DocumentStoreError) as exc_info:
            await store.save(Document())
        assert exc_info.value.operation == "save"
        await store.close()

    @pytest.mark.asyncio
    async def test_missing_bin_id_raises(self) -> None:
        store = JsonBinDocumentStore(None, "master-key", transport=MockTransport(lambda r: Response(200)))
        with pytest.raises(DocumentStoreError):
            await store.load()

    @pytest.mark.asyncio
    async def test_initialize_creates_private_bin(self) -> None:
        seen: list[Request] = []

        def handler(request: Request) -> Response:
            seen.append(request)
            return Response(200, json={"record": {}, "metadata": {"id": "new-bin-id"}})

        store = JsonBinDocumentStore(None, "master-key", transport=MockTransport(handler))
        bin_id = await store.initialize(Document())
        await store.close()

        assert bin_id == "new-bin-id"
        assert store.bin_id == "new-bin-id"
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/v3/b"
        assert seen[0].headers["X-Bin-Private"] == "true"
        assert orjson.loads(seen[0].content) == {"blogs": [], "users": []}


class TestBuildDocumentStore:
    def test_local_by_default(self, settings: Settings) -> None:
        store = build_document_store(settings)
        assert isinstance(store, LocalDocumentStore)
        assert store.path == settings.DATA_FILE

    def test_jsonbin_when_configured(self, settings: Settings) -> None:
        jsonbin_settings = settings.model_copy(
            update={"DOCUMENT_STORE": "jsonbin", "JSONBIN_BIN_ID": BIN_ID},
        )
        store = build_document_store(jsonbin_settings)
        assert isinstance(store, JsonBinDocumentStore)
        assert store.bin_id == BIN_ID
