from __future__ import annotations

import csv
import io
import re
from pathlib import Path

import openpyxl
import pyperclip
import pytest

from tablesnap.output_handler import (
    ClipboardExporter,
    CsvExporter,
    ExcelExporter,
    OutputHandler,
)
from tablesnap.table_state import TableData
from tablesnap.utils.exceptions import ClipboardExportError, ExcelExportError


@pytest.fixture
def pen_table() -> TableData:
    return TableData(headers=['Item', 'Qty'], rows=[['Pen', '10[?]']])


def test_csv_text_has_no_markers_and_no_trailing_newline(pen_table):
    assert CsvExporter().to_text(pen_table) == 'Item,Qty\nPen,10'


def test_csv_quotes_awkward_values():
    table = TableData(
        headers=['Item', 'Note'],
        rows=[['Pen, blue', 'said "hi"\nthen left [?]']],
    )

    text = CsvExporter().to_text(table)
    parsed = list(csv.reader(io.StringIO(text)))

    assert parsed == [['Item', 'Note'], ['Pen, blue', 'said "hi"\nthen left']]


def test_csv_export_writes_timestamped_file(pen_table, tmp_path):
    path = CsvExporter(tmp_path).export(pen_table)

    assert re.fullmatch(r'tablesnap-export-\d+\.csv', Path(path).name)
    with open(path, encoding='utf-8', newline='') as f:
        assert f.read() == 'Item,Qty\nPen,10'


def test_csv_export_does_not_modify_table(pen_table, tmp_path):
    CsvExporter(tmp_path).export(pen_table, 'out.csv')
    assert pen_table.rows == [['Pen', '10[?]']]


def test_csv_export_keeps_unicode(tmp_path):
    table = TableData(headers=['Artikel'], rows=[['Käse €']])
    path = CsvExporter(tmp_path).export(table, 'unicode.csv')

    with open(path, encoding='utf-8') as f:
        assert f.read() == 'Artikel\nKäse €'


def test_tsv_text_is_copied_to_clipboard(pen_table):
    copied = []
    text = ClipboardExporter(copied.append).copy(pen_table)

    assert text == 'Item\tQty\nPen\t10'
    assert copied == [text]


def test_tsv_replaces_tabs_and_newlines_in_values():
    table = TableData(headers=['Item'], rows=[['a\tb\r\nc']])
    assert ClipboardExporter(lambda text: None).to_text(table) == 'Item\na b c'


def test_clipboard_failure_is_reported(pen_table):
    def broken(text):
        raise pyperclip.PyperclipException('no clipboard')

    with pytest.raises(ClipboardExportError) as excinfo:
        ClipboardExporter(broken).copy(pen_table)
    assert excinfo.value.details['reason'] == 'no clipboard'


def test_excel_export(pen_table, tmp_path):
    path = ExcelExporter(tmp_path).export(pen_table, 'table.xlsx')

    sheet = openpyxl.load_workbook(path).active
    assert sheet.title == 'Extracted Data'
    assert [c.value for c in sheet[1]] == ['Item', 'Qty']
    assert [c.value for c in sheet[2]] == ['Pen', '10']
    assert sheet.freeze_panes == 'A2'


def test_output_handler_dispatch(pen_table, tmp_path):
    copied = []
    handler = OutputHandler(tmp_path, clipboard_writer=copied.append)

    assert handler.save(pen_table, 'csv', 'a.csv').endswith('a.csv')
    assert handler.save(pen_table, 'XLSX', 'a.xlsx').endswith('a.xlsx')
    assert handler.save(pen_table, 'tsv') == 'Item\tQty\nPen\t10'
    assert copied == ['Item\tQty\nPen\t10']

    with pytest.raises(ValueError):
        handler.save(pen_table, 'pdf')


def test_excel_keeps_formula_like_text_literal(tmp_path):
    table = TableData(headers=['Item', 'Note'], rows=[['Pen', '=1+1']])
    path = ExcelExporter(tmp_path).export(table, 'formula.xlsx')

    cell = openpyxl.load_workbook(path).active['B2']
    assert cell.value == '=1+1'
    assert cell.data_type == 's'


def test_excel_control_character_is_reported(tmp_path):
    table = TableData(headers=['Item'], rows=[['Pen\x0bblue']])

    with pytest.raises(ExcelExportError) as excinfo:
        ExcelExporter(tmp_path).export(table, 'bad.xlsx')
    assert excinfo.value.details['filepath'].endswith('bad.xlsx')
