from __future__ import annotations

from pathlib import Path

import pytest
import requests
import yaml
from fastapi.testclient import TestClient

import config
import main
from config import ConfigurationManager
from tablesnap.api import create_app
from tablesnap.model_inference import ExtractionClient, TableExtractor
from tablesnap.output_handler import OutputHandler
from tablesnap.session import AppPhase, ReviewSession
from tablesnap.utils.exceptions import ModelRequestError


class AppResponse:
    """requests-style view of a TestClient response."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.ok = response.is_success

    def json(self):
        return self._response.json()


class AppSession:
    """Routes ExtractionClient posts to an in-process FastAPI app."""

    def __init__(self, app):
        self.client = TestClient(app)
        self.urls = []

    def post(self, url, files=None, timeout=None):
        self.urls.append(url)
        path = url.split('://', 1)[-1].split('/', 1)[-1]
        return AppResponse(self.client.post(f'/{path}', files=files))


class RefusingSession:
    def post(self, url, files=None, timeout=None):
        raise requests.ConnectionError('connection refused')


@pytest.fixture
def remote_session(fake_genai, tmp_path):
    def _make(reply):
        app = create_app(extractor=TableExtractor(client=fake_genai(reply=reply)))
        transport = AppSession(app)
        gateway = ExtractionClient('http://tablesnap.test/', session=transport)
        session = ReviewSession(
            gateway,
            output_handler=OutputHandler(tmp_path, clipboard_writer=lambda text: None),
            format_currency=False,
        )
        return session, transport
    return _make


def test_upload_review_export(remote_session, pen_reply, png_bytes):
    session, transport = remote_session(pen_reply)

    assert session.submit(png_bytes, 'receipt.png', 'image/png') is AppPhase.WORKSPACE
    assert transport.urls == ['http://tablesnap.test/api/extract']

    flagged = [cell for row in session.grid.render() for cell in row if cell.flagged]
    assert [(c.row, c.header) for c in flagged] == [(0, 'Qty')]

    path = session.export_csv('pen.csv')
    with open(path, encoding='utf-8') as f:
        assert f.read() == 'Item,Qty\nPen,10'


def test_server_error_reaches_session(remote_session, png_bytes):
    session, _ = remote_session('{"error": "No table detected"}')

    assert session.submit(png_bytes, 'blank.png', 'image/png') is AppPhase.ERROR
    assert session.error == 'No table detected'
    assert session.retry() is AppPhase.IDLE


def test_unreachable_server(png_bytes):
    from tablesnap.input_handler import UploadIntake

    upload = UploadIntake().accept(png_bytes, 'receipt.png', 'image/png')
    client = ExtractionClient('http://localhost:1', session=RefusingSession())

    with pytest.raises(ModelRequestError) as excinfo:
        client.extract(upload)
    assert excinfo.value.message == 'connection refused'


def test_cli_exports_csv(monkeypatch, fake_gateway, invoice_table, png_file, tmp_path, capsys):
    out_dir = tmp_path / 'exports'

    def build_session(server_url=None, output_dir=None, format_currency=None):
        return ReviewSession(
            fake_gateway(table=invoice_table),
            output_handler=OutputHandler(output_dir),
            format_currency=format_currency,
        )

    monkeypatch.setattr(main, 'build_session', build_session)

    exit_code = main.main(['--input', str(png_file), '--output', str(out_dir / 'table.csv')])

    assert exit_code == 0
    assert (out_dir / 'table.csv').read_text(encoding='utf-8') == (
        'Item,Qty,Price\nPen,10,1.5\nInk,2,3'
    )
    printed = capsys.readouterr().out
    assert 'Item | Qty | Price' in printed
    assert '10[?] !' in printed


def test_cli_reports_rejected_upload(monkeypatch, fake_gateway, tmp_path, capsys):
    monkeypatch.setattr(
        main, 'build_session',
        lambda *args, **kwargs: ReviewSession(fake_gateway(), output_handler=OutputHandler(tmp_path)),
    )
    document = tmp_path / 'invoice.pdf'
    document.write_bytes(b'%PDF-1.4 minimal')

    assert main.main(['--input', str(document)]) == 1
    assert 'Unsupported image type' in capsys.readouterr().err


def test_cli_requires_input():
    with pytest.raises(SystemExit):
        main.parse_arguments([])


class JsonResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self.ok = status_code < 400
        self._body = body

    def json(self):
        return self._body


class FixedSession:
    def __init__(self, response):
        self.response = response

    def post(self, url, files=None, timeout=None):
        return self.response


@pytest.mark.parametrize('status, body, message', [
    (200, ['not', 'an', 'object'], 'No data extracted'),
    (502, ['bad gateway'], 'Failed to extract data'),
    (200, {'success': True, 'data': ['Pen']}, 'No data extracted'),
])
def test_client_rejects_unexpected_bodies(png_bytes, status, body, message):
    from tablesnap.input_handler import UploadIntake

    upload = UploadIntake().accept(png_bytes, 'receipt.png', 'image/png')
    client = ExtractionClient('http://tablesnap.test', session=FixedSession(JsonResponse(status, body)))

    with pytest.raises(ModelRequestError) as excinfo:
        client.extract(upload)
    assert excinfo.value.message == message


@pytest.fixture
def currency_config(tmp_path):
    with open(Path(config.__file__).parent / 'settings.yaml', encoding='utf-8') as f:
        settings = yaml.safe_load(f)
    settings['grid']['format_currency'] = True

    path = tmp_path / 'currency.yaml'
    path.write_text(yaml.safe_dump(settings), encoding='utf-8')

    ConfigurationManager.reset()
    yield path
    ConfigurationManager.reset()


def test_cli_currency_follows_config(monkeypatch, fake_gateway, invoice_table, png_file,
                                     tmp_path, capsys, currency_config):
    def build_session(server_url=None, output_dir=None, format_currency=None):
        return ReviewSession(
            fake_gateway(table=invoice_table),
            output_handler=OutputHandler(output_dir),
            format_currency=format_currency,
        )

    monkeypatch.setattr(main, 'build_session', build_session)

    exit_code = main.main([
        '--input', str(png_file),
        '--output', str(tmp_path / 'out'),
        '--config', str(currency_config),
    ])

    assert exit_code == 0
    printed = capsys.readouterr().out
    assert '$1.50' in printed
    assert '$10.00 !' in printed
    assert main.parse_arguments(['--input', 'x.png']).currency is None
