from app.modules.ledger.parser import COLUMNS, RowParser, parse_rows


def test_splits_rows_without_header():
    text = "Alice,1111,100,Credit,,\nBob,2222,-5,Debit,coffee,\n"
    assert list(parse_rows(text)) == [
        ["Alice", "1111", "100", "Credit", "", ""],
        ["Bob", "2222", "-5", "Debit", "coffee", ""],
    ]


def test_quoted_fields_keep_delimiters_and_newlines():
    text = 'Alice,1111,100,Credit,"rent, march",\n"Bob ""B"" Smith",2222,1,Debit,"two\nlines",\n'
    rows = list(parse_rows(text))
    assert rows[0][4] == "rent, march"
    assert rows[1][0] == 'Bob "B" Smith'
    assert rows[1][4] == "two\nlines"


def test_empty_lines_are_skipped():
    text = "\nAlice,1111,100\n\n   \nBob,2222,3\r\n"
    assert list(parse_rows(text)) == [["Alice", "1111", "100"], ["Bob", "2222", "3"]]


def test_rows_of_empty_fields_reach_the_validator():
    assert list(parse_rows(",,\n")) == [["", "", ""]]


def test_short_and_long_rows_are_passed_through():
    rows = list(parse_rows("Alice\nAlice,1111,1,Credit,d,t,extra\n"))
    assert rows == [["Alice"], ["Alice", "1111", "1", "Credit", "d", "t", "extra"]]


def test_row_parser_is_restartable():
    parser = RowParser("Alice,1111,1\nBob,2222,2\n")
    assert list(parser) == list(parser)
    assert len(list(parser)) == 2


def test_column_order():
    assert COLUMNS == ("accountName", "cardNumber", "amount", "type", "description", "targetCardNumber")
