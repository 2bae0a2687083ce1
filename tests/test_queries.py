from accesskit.queries import QueryRow, build_query_sql, list_queries


def test_columns_and_tables():
    rows = [
        QueryRow(attribute=6, expression="a"),
        QueryRow(attribute=6, expression="b"),
        QueryRow(attribute=5, name1="T"),
        QueryRow(attribute=5, name1="U"),
    ]
    assert build_query_sql(rows) == "SELECT a,b FROM [T],[U] "


def test_where_clause_last_wins():
    rows = [
        QueryRow(attribute=6, expression="a"),
        QueryRow(attribute=5, name1="T"),
        QueryRow(attribute=8, expression="x=1"),
        QueryRow(attribute=8, expression="y=2"),
    ]
    assert build_query_sql(rows) == "SELECT a FROM [T] WHERE y=2 "


def test_top_percent_predicate():
    rows = [
        QueryRow(attribute=3, flag=0x20, name1="10"),
        QueryRow(attribute=6, expression="a"),
        QueryRow(attribute=5, name1="T"),
    ]
    assert build_query_sql(rows).startswith("SELECT TOP 10 PERCENT a")


def test_top_without_percent():
    rows = [QueryRow(attribute=3, flag=0x10, name1="5")]
    result = build_query_sql(rows)
    assert result.startswith("SELECT TOP 5 ")
    assert "PERCENT" not in result


def test_distinct_predicates():
    assert build_query_sql([QueryRow(attribute=3, flag=0x2)]).startswith("SELECT DISTINCT ")
    assert build_query_sql([QueryRow(attribute=3, flag=0x8)]).startswith(
        "SELECT DISTINCTROW "
    )


def test_sorting_keeps_first_only():
    rows = [
        QueryRow(attribute=6, expression="a"),
        QueryRow(attribute=5, name1="T"),
        QueryRow(attribute=11, expression="a", name1="D"),
        QueryRow(attribute=11, expression="b"),
    ]
    assert build_query_sql(rows) == "SELECT a FROM [T] ORDER BY a DESCENDING"


def test_join_rows_ignored():
    base = [QueryRow(attribute=6, expression="a"), QueryRow(attribute=5, name1="T")]
    with_join = base + [QueryRow(attribute=7, expression="T.x=U.x", name1="T", name2="U")]
    assert build_query_sql(with_join) == build_query_sql(base)


def test_list_queries_default_space():
    assert list_queries(["q1", "q2"]) == "q1 q2 \n"


def test_list_queries_line_break():
    assert list_queries(["q1", "q2"], line_break=True) == "q1\nq2\n"


def test_list_queries_delimiter():
    assert list_queries(["q1", "q2"], delimiter=",") == "q1,q2,\n"


def test_list_queries_empty():
    assert list_queries([]) == "\n"
    assert list_queries([], line_break=True) == ""