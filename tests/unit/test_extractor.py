from __future__ import annotations

import pytest

from tablesnap.input_handler import UploadIntake
from tablesnap.model_inference import TableExtractor
from tablesnap.model_inference.prompts import EXTRACTION_PROMPT
from tablesnap.utils.exceptions import (
    MalformedModelOutputError,
    MissingCredentialError,
    ModelRequestError,
    NoTableDetectedError,
)


@pytest.fixture
def upload(png_bytes):
    return UploadIntake().accept(png_bytes, 'receipt.png', 'image/png')


def test_extract_sends_prompt_and_image(upload, fake_genai, pen_reply):
    client = fake_genai(reply=pen_reply)
    result = TableExtractor(client=client).extract(upload)

    call = client.models.calls[0]
    assert call['model'] == 'gemini-2.5-flash'
    assert call['contents'][0] == EXTRACTION_PROMPT
    image_part = call['contents'][1]
    assert image_part.inline_data.mime_type == 'image/png'
    assert image_part.inline_data.data == upload.data

    assert result.table.records() == [{'Item': 'Pen', 'Qty': '10[?]'}]
    assert result.uncertain_count == 1
    assert result.model_name == 'gemini-2.5-flash'
    assert result.to_response() == {
        'success': True,
        'data': {'headers': ['Item', 'Qty'], 'rows': [{'Item': 'Pen', 'Qty': '10[?]'}]},
    }


def test_fenced_reply(upload, fake_genai, pen_reply):
    client = fake_genai(reply=f'```json\n{pen_reply}\n```')
    assert TableExtractor(client=client).extract(upload).table.headers == ['Item', 'Qty']


def test_missing_api_key(upload, no_dotenv):
    with pytest.raises(MissingCredentialError) as excinfo:
        TableExtractor().extract(upload)
    assert 'GOOGLE_GENERATIVE_AI_API_KEY' in excinfo.value.message


def test_model_call_failure(upload, fake_genai):
    client = fake_genai(error=RuntimeError('quota exceeded'))

    with pytest.raises(ModelRequestError) as excinfo:
        TableExtractor(client=client).extract(upload)
    assert excinfo.value.message == 'quota exceeded'


def test_no_table(upload, fake_genai):
    client = fake_genai(reply='{"error": "No table detected"}')

    with pytest.raises(NoTableDetectedError):
        TableExtractor(client=client).extract(upload)


def test_empty_reply(upload, fake_genai):
    with pytest.raises(MalformedModelOutputError):
        TableExtractor(client=fake_genai(reply=None)).extract(upload)


def test_model_info(fake_genai):
    info = TableExtractor(model_name='gemini-test', client=fake_genai()).get_model_info()
    assert info == {
        'model_name': 'gemini-test',
        'api_key_env': 'GOOGLE_GENERATIVE_AI_API_KEY',
        'client_ready': True,
    }
