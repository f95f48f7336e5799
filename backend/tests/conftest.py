import base64
import io
import uuid

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from ruru_nft.core.database import DatabaseManager
from ruru_nft.core.dependencies import get_database, get_pipeline_manager
from ruru_nft.core.supabase_client import SupabaseClient
from ruru_nft.main import app
from ruru_nft.services.pending_uploads import PendingUploadRegistry
from ruru_nft.services.pipeline_manager import PipelineManager

GATEWAY = "https://gateway.test/ipfs"


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Mimics the postgrest builder chain: table().select().eq().execute()."""

    def __init__(self, client, table, op, payload=None, count=None):
        self.client = client
        self.table = table
        self.op = op
        self.payload = payload
        self.count = count
        self.filters = []

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def execute(self):
        self.client.calls.append((self.table, self.op, self.payload, list(self.filters)))
        if self.client.error is not None:
            raise self.client.error

        rows = self.client.tables.setdefault(self.table, [])
        matched = [row for row in rows if all(row.get(c) == v for c, v in self.filters)]

        if self.op == "select":
            data = [dict(row) for row in matched]
            return FakeResponse(data, len(data) if self.count else None)
        if self.op == "insert":
            row = dict(self.payload)
            row["id"] = str(uuid.uuid4())
            row["$collectionId"] = self.table
            row["$databaseId"] = "test-db"
            row["$permissions"] = []
            rows.append(row)
            return FakeResponse([] if self.client.hide_inserts else [dict(row)])
        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])
        raise AssertionError(f"unexpected op {self.op}")


class FakeTable:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def select(self, columns="*", count=None):
        return FakeQuery(self.client, self.name, "select", count=count)

    def insert(self, payload):
        return FakeQuery(self.client, self.name, "insert", payload=payload)

    def update(self, payload):
        return FakeQuery(self.client, self.name, "update", payload=payload)


class FakeSupabase:
    """In-memory stand-in for the Supabase client."""

    def __init__(self):
        self.tables = {}
        self.calls = []
        self.error = None
        self.hide_inserts = False

    def table(self, name):
        return FakeTable(self, name)


class FakeStorage:
    """Records pins instead of talking to Pinata."""

    def __init__(self):
        self.files = []
        self.documents = []
        self.json_error = None

    def pin_bytes(self, data, name, content_type="application/octet-stream"):
        self.files.append({"data": data, "name": name, "content_type": content_type})
        return f"{GATEWAY}/QmImage{len(self.files)}"

    def pin_json(self, document):
        if self.json_error is not None:
            raise self.json_error
        self.documents.append(document)
        return f"{GATEWAY}/QmMeta{len(self.documents)}"

    @property
    def pin_count(self):
        return len(self.files) + len(self.documents)


def _image_bytes(size=(100, 50), mode="RGB", format="PNG"):
    image = Image.new(mode, size, color="blue" if mode == "RGB" else 0)
    buffer = io.BytesIO()
    image.save(buffer, format=format)
    return buffer.getvalue()


def _data_url(size=(100, 50), mime="image/png", format="PNG"):
    encoded = base64.b64encode(_image_bytes(size, format=format)).decode("ascii")
    return f"data:{mime};base64,{encoded}"


@pytest.fixture
def image_bytes_factory():
    return _image_bytes


@pytest.fixture
def data_url_factory():
    return _data_url


@pytest.fixture
def fake_supabase():
    fake = FakeSupabase()
    SupabaseClient._instance = fake
    yield fake
    SupabaseClient.reset()


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def pending_uploads():
    return PendingUploadRegistry(ttl=60)


@pytest.fixture
def pipeline(fake_supabase, fake_storage, pending_uploads):
    return PipelineManager(
        storage=fake_storage,
        database=DatabaseManager(table="nfts"),
        pending=pending_uploads,
    )


@pytest.fixture
def client(pipeline):
    app.dependency_overrides[get_pipeline_manager] = lambda: pipeline
    app.dependency_overrides[get_database] = lambda: pipeline.database
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def upload_payload(data_url_factory):
    return {
        "publicKey": "8fQ2wallet",
        "title": "Kiwi at Dusk",
        "symbol": "KIWI",
        "description": "A kiwi bird under an orange sky",
        "image": data_url_factory(),
        "author": "Aroha",
        "royalty": "5",
        "price": "1.25",
        "tags": ["bird", "sunset"],
    }
