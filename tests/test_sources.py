from scoped_config_manager import coerce_query_value, parse_query_string


def test_parse_full_url():
    params = parse_query_string("https://pad.example.org/p/test?showChat=false&userName=Ann%20Lee&lang=de")
    assert params == {"showChat": "false", "userName": "Ann Lee", "lang": "de"}


def test_parse_bare_names_and_fragment():
    params = parse_query_string("/p/test?noColors&rtl=true#L12")
    assert params == {"noColors": None, "rtl": "true"}


def test_parse_query_only_and_empty():
    assert parse_query_string("a=1&&b=") == {"a": "1", "b": ""}
    assert parse_query_string("") == {}
    assert parse_query_string("https://pad.example.org/p/test?") == {}


def test_last_occurrence_wins():
    assert parse_query_string("?a=1&a=2") == {"a": "2"}


def test_coerce_boolean_literals_only():
    assert coerce_query_value("true") is True
    assert coerce_query_value("false") is False
    assert coerce_query_value("True") == "True"
    assert coerce_query_value("1") == "1"
    assert coerce_query_value("") is None
    assert coerce_query_value(None) is None
