# tests/test_asset_text_parser.py
import pytest

from assettag.errors import EmptyInputError, NoValidRowsError, ParseError
from assettag.models.asset_record import NO_NAME, NO_SPEC, AssetRecord
from assettag.parser.asset_text_parser import is_header_row, parse_asset_text


def test_parses_rows_in_order():
    text = "ZC40-SH-0004\t16T机械硬盘\t16T机械硬盘 NAS用\nZC34-SH-0240\t10.2寸 IPAD 64G\t10.2寸 IPAD 64G"
    records = parse_asset_text(text)
    assert records == (
        AssetRecord("ZC40-SH-0004", "16T机械硬盘", "16T机械硬盘 NAS用"),
        AssetRecord("ZC34-SH-0240", "10.2寸 IPAD 64G", "10.2寸 IPAD 64G"),
    )


@pytest.mark.parametrize("text", ["", "   ", "\n\n", " \r\n "])
def test_empty_input(text):
    with pytest.raises(EmptyInputError):
        parse_asset_text(text)


def test_tab_only_lines_have_no_valid_rows():
    with pytest.raises(NoValidRowsError):
        parse_asset_text("\t\t\n\t\t")


def test_header_only_has_no_valid_rows():
    with pytest.raises(NoValidRowsError):
        parse_asset_text("资产编码\t资产名称\t规格型号")


def test_parse_errors_carry_user_message():
    with pytest.raises(ParseError) as info:
        parse_asset_text("")
    assert str(info.value) == "请先粘贴数据"


def test_header_row_is_skipped():
    records = parse_asset_text("资产编码\tName\tSpec\nA1\tFoo\tBar")
    assert records == (AssetRecord("A1", "Foo", "Bar"),)


@pytest.mark.parametrize("first", ["资产编码", "编码", "物料编码", "Asset Code", "Code"])
def test_header_markers(first):
    assert is_header_row([first, "x"])


@pytest.mark.parametrize("first", ["code", "A1", "CODE", ""])
def test_non_header_values(first):
    assert not is_header_row([first])


def test_header_only_checked_on_first_line():
    records = parse_asset_text("A1\tFoo\nCode-7\tBar")
    assert [r.code for r in records] == ["A1", "Code-7"]


def test_header_after_leading_blank_lines():
    records = parse_asset_text("\n\nCode\tName\nA1\tFoo\n\n")
    assert [r.code for r in records] == ["A1"]


def test_missing_columns_use_placeholders():
    assert parse_asset_text("A1") == (AssetRecord("A1", NO_NAME, NO_SPEC),)
    assert parse_asset_text("A1\t\tSpec") == (AssetRecord("A1", NO_NAME, "Spec"),)
    assert parse_asset_text("A1\tName") == (AssetRecord("A1", "Name", NO_SPEC),)


def test_rows_with_empty_first_column_are_skipped():
    text = "A1\tFoo\tBar\n\tOrphan\tName\n\nA2\tBaz\tQux"
    records = parse_asset_text(text)
    assert [r.code for r in records] == ["A1", "A2"]


def test_columns_are_trimmed_and_crlf_handled():
    records = parse_asset_text("  A1 \t Foo \t Bar \r\nA2\tBaz\tQux\r\n")
    assert records == (AssetRecord("A1", "Foo", "Bar"), AssetRecord("A2", "Baz", "Qux"))


def test_extra_columns_are_ignored():
    assert parse_asset_text("A1\tFoo\tBar\textra\tmore") == (AssetRecord("A1", "Foo", "Bar"),)


def test_duplicate_codes_are_kept():
    records = parse_asset_text("A1\tFoo\nA1\tBar")
    assert len(records) == 2
