from __future__ import annotations

import io
import json
from types import SimpleNamespace

import pytest
from PIL import Image

from tablesnap.model_inference import ExtractionResult
from tablesnap.table_state import TableData, TableStore


class FakeModels:
    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    def generate_content(self, model, contents):
        self.calls.append({'model': model, 'contents': contents})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.reply)


class FakeGenaiClient:
    """Stands in for google.genai.Client in tests."""

    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.models = FakeModels(reply, error)


class FakeGateway:
    def __init__(self, table: TableData | None = None, error: Exception | None = None) -> None:
        self.table = table
        self.error = error
        self.uploads = []

    def extract(self, upload):
        self.uploads.append(upload)
        if self.error is not None:
            raise self.error
        return ExtractionResult(table=self.table, source_file=upload.filename)


PEN_REPLY = json.dumps({
    'headers': ['Item', 'Qty'],
    'rows': [{'Item': 'Pen', 'Qty': '10[?]'}],
})


@pytest.fixture
def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new('RGB', (8, 8), 'white').save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def png_file(tmp_path, png_bytes):
    path = tmp_path / 'receipt.png'
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def invoice_table() -> TableData:
    return TableData(
        headers=['Item', 'Qty', 'Price'],
        rows=[
            ['Pen', '10[?]', '1.5'],
            ['Ink', '2', '3'],
        ],
    )


@pytest.fixture
def invoice_store(invoice_table) -> TableStore:
    return TableStore(invoice_table)


@pytest.fixture
def fake_genai():
    """Factory for fake model clients: ``fake_genai(reply=...)``."""
    return FakeGenaiClient


@pytest.fixture
def fake_gateway():
    """Factory for fake extraction gateways: ``fake_gateway(table=...)``."""
    return FakeGateway


@pytest.fixture
def pen_reply() -> str:
    return PEN_REPLY


@pytest.fixture
def no_dotenv(monkeypatch):
    """Keep a developer's .env file out of credential tests."""
    monkeypatch.setattr('config.load_dotenv', lambda *args, **kwargs: False)
    monkeypatch.delenv('GOOGLE_GENERATIVE_AI_API_KEY', raising=False)
