from fleetwatch.sheets import parse_csv, parse_line


def test_quoted_comma_is_not_a_separator():
    assert parse_line('a,"b,c",d') == ["a", "b,c", "d"]


def test_fields_are_trimmed_and_trailing_empty_fields_kept():
    assert parse_line(" a , b ,,") == ["a", "b", "", ""]


def test_unmatched_quote_swallows_rest_of_line():
    assert parse_line('a,"b,c') == ["a", "b,c"]
    assert parse_line('a,"b,c,d') == ["a", "b,c,d"]


def test_doubled_quotes_are_dropped_not_escaped():
    assert parse_line('"say ""hi""",x') == ["say hi", "x"]


def test_parse_csv_splits_lines_and_strips_carriage_returns():
    rows = parse_csv("h1,h2\r\n1,2\r\n")
    assert rows == [["h1", "h2"], ["1", "2"], [""]]


def test_empty_text_yields_single_empty_row():
    assert parse_csv("") == [[""]]
