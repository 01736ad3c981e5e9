from __future__ import annotations

import pytest

from tablesnap.model_inference import parse_model_reply, strip_code_fences
from tablesnap.model_inference.response_parser import (
    INVALID_STRUCTURE_MESSAGE,
    PARSE_FAILURE_MESSAGE,
)
from tablesnap.utils.exceptions import MalformedModelOutputError, NoTableDetectedError

BODY = '{"headers": ["Item", "Qty"], "rows": [{"Item": "Pen", "Qty": "10[?]"}]}'


@pytest.mark.parametrize('text', [
    BODY,
    f'```json\n{BODY}\n```',
    f'```\n{BODY}\n```',
    f'   {BODY}  \n',
])
def test_parses_plain_and_fenced_replies(text):
    table = parse_model_reply(text)

    assert table.headers == ['Item', 'Qty']
    assert table.records() == [{'Item': 'Pen', 'Qty': '10[?]'}]


def test_strip_code_fences():
    assert strip_code_fences('```json\n{}\n```') == '{}'
    assert strip_code_fences('{}') == '{}'
    assert strip_code_fences(None) == ''


def test_error_object_means_no_table():
    with pytest.raises(NoTableDetectedError) as excinfo:
        parse_model_reply('{"error": "No table detected"}')
    assert excinfo.value.message == 'No table detected'


def test_invalid_json():
    with pytest.raises(MalformedModelOutputError) as excinfo:
        parse_model_reply('Sorry, I cannot help with that.')

    assert excinfo.value.message == PARSE_FAILURE_MESSAGE
    assert excinfo.value.details['raw_text'] == 'Sorry, I cannot help with that.'
    assert str(excinfo.value) == PARSE_FAILURE_MESSAGE


@pytest.mark.parametrize('text', [
    '{"headers": ["Item"]}',
    '{"rows": []}',
    '[1, 2, 3]',
    '{"headers": "Item", "rows": []}',
    '{"headers": ["Item"], "rows": ["Pen"]}',
])
def test_wrong_shape(text):
    with pytest.raises(MalformedModelOutputError) as excinfo:
        parse_model_reply(text)
    assert excinfo.value.message == INVALID_STRUCTURE_MESSAGE


def test_table_without_rows_is_valid():
    table = parse_model_reply('{"headers": ["Item", "Qty"], "rows": []}')
    assert table.headers == ['Item', 'Qty']
    assert table.row_count == 0
