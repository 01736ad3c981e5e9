from __future__ import annotations

import pytest

from tablesnap.table_state import TableData, has_uncertainty, strip_uncertainty


def test_from_dict_keeps_header_order_and_fills_missing_cells():
    table = TableData.from_dict({
        'headers': ['Item', 'Qty', 'Price'],
        'rows': [{'Price': '1.50', 'Item': 'Pen'}],
    })

    assert table.headers == ['Item', 'Qty', 'Price']
    assert table.rows == [['Pen', '', '1.50']]


def test_from_dict_drops_unknown_keys_and_stringifies_values():
    table = TableData.from_dict({
        'headers': ['Item', 'Qty', 'Paid'],
        'rows': [{'Item': 'Pen', 'Qty': 10, 'Paid': True, 'Colour': 'blue'}],
    })

    assert table.records() == [{'Item': 'Pen', 'Qty': '10', 'Paid': 'true'}]


def test_duplicate_and_blank_headers_become_unique():
    table = TableData.from_records(['Amount', 'Amount', ''], [{'Amount': '5'}])

    assert table.headers == ['Amount', 'Amount 2', 'Column 3']
    assert table.rows == [['5', '5', '']]


def test_ragged_rows_are_rejected():
    with pytest.raises(ValueError):
        TableData(headers=['Item', 'Qty'], rows=[['Pen']])


def test_cell_and_unknown_column(invoice_table):
    assert invoice_table.cell(1, 'Item') == 'Ink'
    with pytest.raises(KeyError):
        invoice_table.column_index('Colour')


def test_to_dict_uses_wire_format(invoice_table):
    assert invoice_table.to_dict() == {
        'headers': ['Item', 'Qty', 'Price'],
        'rows': [
            {'Item': 'Pen', 'Qty': '10[?]', 'Price': '1.5'},
            {'Item': 'Ink', 'Qty': '2', 'Price': '3'},
        ],
    }


def test_uncertain_cells_lists_flagged_positions(invoice_table):
    assert invoice_table.uncertain_cells() == [(0, 'Qty')]


def test_cleaned_rows_strip_markers_without_touching_table(invoice_table):
    assert invoice_table.cleaned_rows()[0] == ['Pen', '10', '1.5']
    assert invoice_table.rows[0][1] == '10[?]'


@pytest.mark.parametrize('value, expected', [
    ('10[?]', '10'),
    ('10 [?]', '10'),
    ('Smith [?] Jr', 'SmithJr'),
    ('[?]', ''),
    ('plain', 'plain'),
    ('', ''),
])
def test_strip_uncertainty(value, expected):
    assert strip_uncertainty(value) == expected


def test_has_uncertainty():
    assert has_uncertainty('42 [?]')
    assert not has_uncertainty('42')
    assert not has_uncertainty('')
