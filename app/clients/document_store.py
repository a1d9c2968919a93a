"""
Whole-document stores for the blog data.

Two backends keep the same ``{"blogs": [...], "users": [...]}`` document:

- ``LocalDocumentStore`` writes a JSON file on disk.
- ``JsonBinDocumentStore`` keeps it in a single JSONBin bin.

Neither supports partial updates. Every mutation loads the whole document,
edits it in memory and writes the whole document back. Writers inside one
process serialise through ``store.lock``; across processes the last save wins.
"""

from asyncio import Lock
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
from httpx import AsyncBaseTransport, AsyncClient, HTTPError
from orjson import OPT_INDENT_2, JSONDecodeError, dumps, loads
from pydantic import ValidationError

from app.configs.settings import Settings
from app.errors.store import DocumentStoreError
from app.monitoring import get_logger
from app.schemas.document import Document

logger = get_logger(__name__)


def parse_document(raw: bytes | str, source: str) -> Document:
    """
    Decode and validate a stored document.

    Raises:
        DocumentStoreError: If the payload is not JSON or not document-shaped.
    """
    try:
        data: Any = loads(raw)
    except JSONDecodeError as e:
        mssg = f"Stored document at {source} is not valid JSON"
        raise DocumentStoreError(mssg) from e

    # JSONBin wraps the record unless X-Bin-Meta is honoured
    if isinstance(data, dict) and "record" in data and "blogs" not in data:
        data = data["record"]

    if not isinstance(data, dict):
        mssg = f"Stored document at {source} is not a JSON object"
        raise DocumentStoreError(mssg)

    try:
        return Document.model_validate(data)
    except ValidationError as e:
        mssg = f"Stored document at {source} does not match the blog schema"
        raise DocumentStoreError(mssg) from e


def serialize_document(document: Document) -> bytes:
    return dumps(document.model_dump(mode="json"), option=OPT_INDENT_2)


class LocalDocumentStore:
    """
    JSON file store.

    A missing file is the initial state and loads as an empty document;
    the file and its directory are created on the first save.
    """

    name = "local"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.lock = Lock()

    async def load(self) -> Document:
        try:
            async with aiofiles.open(self.path, "rb") as f:
                raw = await f.read()
        except FileNotFoundError:
            logger.info(f"No data file at {self.path}, starting from an empty document")
            return Document()
        except OSError as e:
            mssg = f"Could not read data file {self.path}"
            raise DocumentStoreError(mssg) from e

        return parse_document(raw, str(self.path))

    async def save(self, document: Document) -> None:
        payload = serialize_document(document)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            mssg = f"Could not write data file {self.path}"
            raise DocumentStoreError(mssg, operation="save") from e

        logger.debug(f"Saved document with {len(document.blogs)} blogs to {self.path}")

    async def initialize(self, document: Document) -> str:
        await self.save(document)
        return str(self.path)

    async def close(self) -> None:
        return None


class JsonBinDocumentStore:
    """
    JSONBin-backed store.

    The bin id and master key come from settings. Requests use the httpx
    default timeout; failures are never retried.
    """

    name = "jsonbin"

    def __init__(
        self,
        bin_id: str | None,
        master_key: str,
        base_url: str = "https://api.jsonbin.io/v3",
        transport: AsyncBaseTransport | None = None,
    ) -> None:
        self.bin_id = bin_id
        self.base_url = base_url
        self.lock = Lock()
        self._master_key = master_key
        self._transport = transport
        self._client: AsyncClient | None = None

    @property
    def client(self) -> AsyncClient:
        if self._client is None:
            self._client = AsyncClient(
                base_url=self.base_url,
                headers={
                    "X-Master-Key": self._master_key,
                    "Content-Type": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    def _require_bin(self) -> str:
        if not self.bin_id:
            mssg = "JSONBIN_BIN_ID is not configured"
            raise DocumentStoreError(mssg)
        return self.bin_id

    async def load(self) -> Document:
        bin_id = self._require_bin()
        try:
            response = await self.client.get(
                f"/b/{bin_id}/latest",
                headers={"X-Bin-Meta": "false"},
            )
            response.raise_for_status()
        except HTTPError as e:
            mssg = f"Could not fetch bin {bin_id}"
            raise DocumentStoreError(mssg) from e

        return parse_document(response.content, f"bin {bin_id}")

    async def save(self, document: Document) -> None:
        bin_id = self._require_bin()
        try:
            response = await self.client.put(f"/b/{bin_id}", content=serialize_document(document))
            response.raise_for_status()
        except HTTPError as e:
            mssg = f"Could not update bin {bin_id}"
            raise DocumentStoreError(mssg, operation="save") from e

        logger.debug(f"Saved document with {len(document.blogs)} blogs to bin {bin_id}")

    async def initialize(self, document: Document) -> str:
        """Create a new private bin holding ``document`` and adopt its id."""
        try:
            response = await self.client.post(
                "/b",
                content=serialize_document(document),
                headers={"X-Bin-Private": "true"},
            )
            response.raise_for_status()
            bin_id: str = response.json()["metadata"]["id"]
        except (HTTPError, KeyError, ValueError) as e:
            mssg = "Could not create a new bin"
            raise DocumentStoreError(mssg, operation="save") from e

        self.bin_id = bin_id
        logger.info(f"Created bin {bin_id}")
        return bin_id

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def build_document_store(settings: Settings) -> LocalDocumentStore | JsonBinDocumentStore:
    """Create the store selected by ``DOCUMENT_STORE``."""
    if settings.DOCUMENT_STORE == "jsonbin":
        return JsonBinDocumentStore(
            bin_id=settings.JSONBIN_BIN_ID,
            master_key=settings.JSONBIN_MASTER_KEY.get_secret_value(),
            base_url=settings.JSONBIN_BASE_URL,
        )
    return LocalDocumentStore(settings.DATA_FILE)
