"""
Document store backends

Every backend keeps one whole JSON array per collection and exposes only
whole-collection read and overwrite. Services build all record-level
operations on top of these two calls.
"""

import asyncio
import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests
from fastapi import Request
from requests.adapters import HTTPAdapter
from sqlalchemy.exc import SQLAlchemyError
from urllib3.util.retry import Retry

from database.connection import Base, create_engine, create_session_factory
from models.document import Document
from utils.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """Whole-collection persistence contract"""

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock(self, collection: str) -> asyncio.Lock:
        """Writer lock shared by every service touching `collection`"""
        if collection not in self._locks:
            self._locks[collection] = asyncio.Lock()
        return self._locks[collection]

    async def init(self):
        pass

    async def close(self):
        pass

    @abstractmethod
    async def read(self, collection: str) -> List[Dict[str, Any]]:
        """Return the collection contents, or [] if it was never written"""

    @abstractmethod
    async def write(self, collection: str, items: List[Dict[str, Any]]) -> None:
        """Replace the collection contents; raise StoreUnavailable on failure"""


class MemoryStore(DocumentStore):
    """In-process store, mostly for tests and local experiments"""

    def __init__(self, initial: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        super().__init__()
        self._collections: Dict[str, List[Dict[str, Any]]] = copy.deepcopy(
            initial or {}
        )

    async def read(self, collection: str) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._collections.get(collection, []))

    async def write(self, collection: str, items: List[Dict[str, Any]]) -> None:
        self._collections[collection] = copy.deepcopy(items)


class FileStore(DocumentStore):
    """One `<collection>.json` file per collection, shaped {collection: [...]}"""

    def __init__(self, data_dir: str):
        super().__init__()
        self.data_dir = data_dir

    def path_for(self, collection: str) -> str:
        return os.path.join(self.data_dir, f"{collection}.json")

    async def read(self, collection: str) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._read_file, collection)

    async def write(self, collection: str, items: List[Dict[str, Any]]) -> None:
        await asyncio.to_thread(self._write_file, collection, items)

    def _read_file(self, collection: str) -> List[Dict[str, Any]]:
        path = self.path_for(collection)
        if not os.path.exists(path):
            return []

        try:
            with open(path, encoding="utf-8") as fh:
                raw = fh.read()
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise StoreUnavailable(f"Could not read {collection} data file")

        if not raw.strip():
            return []

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt data file {path}: {e}")
            raise StoreUnavailable(f"{collection} data file is not valid JSON")

        if not isinstance(document, dict):
            logger.error(f"Data file {path} does not hold a JSON object")
            raise StoreUnavailable(f"{collection} data file has an unexpected shape")

        return document.get(collection) or []

    def _write_file(self, collection: str, items: List[Dict[str, Any]]) -> None:
        path = self.path_for(collection)
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            # Write next to the target, then swap it in
            fd, tmp_path = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{collection}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump({collection: items}, fh, indent=2)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise StoreUnavailable(f"Could not write {collection} data file")


class SQLStore(DocumentStore):
    """Collections kept as JSON rows in a `documents` table"""

    def __init__(self, database_url: str, echo: bool = False):
        super().__init__()
        self.engine = create_engine(database_url, echo=echo)
        self.session_factory = create_session_factory(self.engine)

    async def init(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self):
        await self.engine.dispose()

    async def read(self, collection: str) -> List[Dict[str, Any]]:
        try:
            async with self.session_factory() as session:
                document = await session.get(Document, collection)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load {collection} document: {e}")
            raise StoreUnavailable(f"Could not read {collection} from database")

        if document is None or not document.data:
            return []
        return list(document.data)

    async def write(self, collection: str, items: List[Dict[str, Any]]) -> None:
        try:
            async with self.session_factory() as session:
                document = await session.get(Document, collection)
                if document is None:
                    session.add(Document(collection=collection, data=items))
                else:
                    document.data = items
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save {collection} document: {e}")
            raise StoreUnavailable(f"Could not write {collection} to database")


class JSONBinStore(DocumentStore):
    """
    Remote JSON-bin service, one bin URL per collection.

    GET answers {"record": {collection: [...]}}; PUT overwrites the bin
    with {collection: [...]}.
    """

    def __init__(
        self,
        bin_urls: Dict[str, Optional[str]],
        master_key: Optional[str] = None,
        timeout: float = 10.0,
        max_retries: int = 3,
    ):
        super().__init__()
        self.bin_urls = bin_urls
        self.master_key = master_key
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry logic and JSON headers."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "PUT"],
            backoff_factor=0.5,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

        if self.master_key:
            session.headers.update({"X-Master-Key": self.master_key})

        return session

    def url_for(self, collection: str) -> str:
        url = self.bin_urls.get(collection)
        if not url:
            raise StoreUnavailable(f"No JSON-bin URL configured for {collection}")
        return url

    async def close(self):
        self.session.close()

    async def read(self, collection: str) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._get, collection)

    async def write(self, collection: str, items: List[Dict[str, Any]]) -> None:
        await asyncio.to_thread(self._put, collection, items)

    def _get(self, collection: str) -> List[Dict[str, Any]]:
        url = self.url_for(collection)
        try:
            response = self.session.get(url, timeout=self.timeout)
            if response.status_code == 404:
                return []
            response.raise_for_status()
            payload = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"JSON-bin GET failed for {collection}: {e!s}")
            raise StoreUnavailable(f"Could not fetch {collection} from JSON-bin")

        record = (payload.get("record") or {}) if isinstance(payload, dict) else None
        if not isinstance(record, dict):
            logger.error(f"JSON-bin record for {collection} is not an object")
            raise StoreUnavailable(
                f"JSON-bin {collection} record has an unexpected shape"
            )
        return record.get(collection) or []

    def _put(self, collection: str, items: List[Dict[str, Any]]) -> None:
        url = self.url_for(collection)
        try:
            response = self.session.put(
                url, json={collection: items}, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"JSON-bin PUT failed for {collection}: {e!s}")
            raise StoreUnavailable(f"Could not save {collection} to JSON-bin")


def create_store(settings) -> DocumentStore:
    """Build the backend selected by STORE_BACKEND"""
    backend = settings.store_backend
    if backend == "memory":
        return MemoryStore()
    if backend == "file":
        return FileStore(settings.data_dir)
    if backend == "sql":
        return SQLStore(settings.database_url, echo=settings.debug)
    if backend == "jsonbin":
        return JSONBinStore(
            settings.jsonbin_urls,
            master_key=settings.jsonbin_master_key,
            timeout=settings.jsonbin_timeout,
            max_retries=settings.jsonbin_retries,
        )
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


# Dependency to get the application's document store
def get_store(request: Request) -> DocumentStore:
    return request.app.state.store
