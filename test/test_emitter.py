# test/test_emitter.py
import pytest
from sqlalchemy import create_engine, text

from sift import FilterShape, SiftConfig, SqlBuffer, TextClauseSink, apply_filters, parse_filters
from sift.core.query.emitter import ClauseEmitter
from sift.core.query.model import FilterModel
from sift.core.query.sinks import Sink


def emit(shape, query, **buffer_kwargs) -> SqlBuffer:
    return apply_filters(parse_filters(shape, query), SqlBuffer(**buffer_kwargs))


class TestClauseEmitter:
    def test_reference_scenario(self):
        shape = FilterShape.builder("U").string("name").number("age", int).build()
        buffer = emit(shape, "name[sw]=Ali&age[gte]=18&limit=10&order_by[desc]=age")
        assert buffer.sql == " AND name LIKE ? AND age >= ? ORDER BY age DESC LIMIT 10"
        assert buffer.params == ["Ali%", 18]

    def test_emission_order_is_fixed(self, user_shape):
        buffer = emit(user_shape, "skip=5&order_by[asc]=name&limit=2&active=1&name[ew]=ce")
        assert buffer.sql == " AND active = ? AND name LIKE ? ORDER BY name ASC LIMIT 2 OFFSET 5"
        assert buffer.params == [True, "%ce"]

    def test_every_string_operator(self, user_shape):
        buffer = emit(
            user_shape,
            "name=a&name[ne]=b&name[like]=c%25&name[not_like]=d&name[sw]=e&name[ew]=f&name[co]=g",
        )
        assert buffer.sql == (
            " AND name = ? AND name <> ? AND name LIKE ? AND name NOT LIKE ?"
            " AND name LIKE ? AND name LIKE ? AND name LIKE ?"
        )
        assert buffer.params == ["a", "b", "c%", "d", "e%", "%f", "%g%"]

    def test_every_number_operator(self, user_shape):
        buffer = emit(user_shape, "age=1&age[ne]=2&age[gt]=3&age[lt]=4&age[gte]=5&age[lte]=6")
        assert buffer.sql == (
            " AND age = ? AND age <> ? AND age > ? AND age < ? AND age >= ? AND age <= ?"
        )
        assert buffer.params == [1, 2, 3, 4, 5, 6]

    def test_no_terms_emits_nothing(self, user_shape):
        buffer = emit(user_shape, "bogus_field=x")
        assert buffer.sql == ""
        assert buffer.params == []

    def test_skipped_fields_never_reach_sql(self, user_shape):
        buffer = emit(user_shape, "password=hunter2&name=x")
        assert "password" not in buffer.sql
        assert buffer.params == ["x"]

    def test_bracketed_values_with_debug_logging(self, user_shape, debug_logging):
        buffer = emit(user_shape, "name=Ali[/green]&age[gt]=1")
        assert buffer.sql == " AND name = ? AND age > ?"
        assert buffer.params == ["Ali[/green]", 1]

    def test_values_are_never_inlined(self, user_shape):
        buffer = emit(user_shape, "name=x' OR '1'='1")
        assert "OR" not in buffer.sql
        assert buffer.params == ["x' OR '1'='1"]

    def test_table_prefixed_columns(self):
        shape = FilterShape.builder("U", table="u").number("age").build()
        buffer = emit(shape, "age[gt]=1&order_by[asc]=age")
        assert buffer.sql == " AND u.age > ? ORDER BY u.age ASC"

    def test_deterministic(self, user_shape):
        query = "name[co]=a&age[lt]=9&active=true&order_by[desc]=name&limit=4"
        first, second = emit(user_shape, query), emit(user_shape, query)
        assert (first.sql, first.params) == (second.sql, second.params)

    def test_empty_model(self):
        buffer = SqlBuffer("SELECT 1 WHERE 1=1")
        ClauseEmitter(FilterModel.empty()).emit(buffer)
        assert buffer.sql == "SELECT 1 WHERE 1=1"

    def test_custom_sink(self, user_shape):
        class Recorder:
            def __init__(self):
                self.calls = []

            def push(self, sql):
                self.calls.append(("text", sql))

            def push_bind(self, value):
                self.calls.append(("bind", value))

        recorder = Recorder()
        assert isinstance(recorder, Sink)
        apply_filters(parse_filters(user_shape, "age[gt]=1&limit=3"), recorder)
        assert recorder.calls == [("text", " AND age > "), ("bind", 1), ("text", " LIMIT 3")]


class TestSqlBuffer:
    @pytest.mark.parametrize(
        "placeholder, expected",
        [
            ("qmark", " AND name = ? AND age > ?"),
            ("numeric", " AND name = $1 AND age > $2"),
            ("format", " AND name = %s AND age > %s"),
            ("named", " AND name = :p0 AND age > :p1"),
        ],
    )
    def test_placeholder_styles(self, user_shape, placeholder, expected):
        buffer = emit(user_shape, "name=x&age[gt]=1", placeholder=placeholder)
        assert buffer.sql == expected

    def test_placeholder_from_config(self, user_shape):
        config = SiftConfig(placeholder="numeric")
        buffer = apply_filters(parse_filters(user_shape, "age=1", config), SqlBuffer.from_config(config))
        assert buffer.sql == " AND age = $1"

    def test_from_config_defaults_to_qmark(self, user_shape):
        buffer = apply_filters(parse_filters(user_shape, "age=1"), SqlBuffer.from_config(initial="WHERE 1=1"))
        assert buffer.sql == "WHERE 1=1 AND age = ?"

    def test_text_clause_sink_ignores_configured_style(self):
        sink = TextClauseSink.from_config(SiftConfig(placeholder="format"))
        sink.push_bind(1)
        assert sink.sql == ":sift_0"

    def test_named_params(self, user_shape):
        buffer = emit(user_shape, "name=x&age[gt]=1", placeholder="named")
        assert buffer.named_params == {"p0": "x", "p1": 1}

    def test_initial_text(self, user_shape):
        buffer = emit(user_shape, "age=1", initial="SELECT * FROM users WHERE 1=1")
        assert str(buffer) == "SELECT * FROM users WHERE 1=1 AND age = ?"


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, age INTEGER, active BOOLEAN)"))
        conn.execute(
            text("INSERT INTO users (name, age, active) VALUES (:name, :age, :active)"),
            [
                {"name": "Alice", "age": 31, "active": True},
                {"name": "Alina", "age": 17, "active": True},
                {"name": "Ali", "age": 22, "active": False},
                {"name": "Bob", "age": 45, "active": True},
            ],
        )
    yield engine
    engine.dispose()


class TestTextClauseSink:
    def test_statement_binds_by_name(self, user_shape):
        sink = apply_filters(parse_filters(user_shape, "name[sw]=Ali&age[gte]=18"), TextClauseSink("SELECT 1 WHERE 1=1"))
        assert sink.sql == "SELECT 1 WHERE 1=1 AND name LIKE :sift_0 AND age >= :sift_1"
        compiled = sink.statement().compile()
        assert compiled.params == {"sift_0": "Ali%", "sift_1": 18}

    def test_executes_against_sqlite(self, engine, user_shape):
        model = parse_filters(user_shape, "name[sw]=Ali&age[gte]=18&active=true&order_by[desc]=age&limit=10")
        sink = apply_filters(model, TextClauseSink("SELECT name FROM users WHERE 1=1"))
        with engine.connect() as conn:
            names = [row.name for row in conn.execute(sink.statement())]
        assert names == ["Alice"]

    def test_pagination_against_sqlite(self, engine, user_shape):
        model = parse_filters(user_shape, "order_by[asc]=age&limit=2&skip=1")
        sink = apply_filters(model, TextClauseSink("SELECT name FROM users WHERE 1=1"))
        with engine.connect() as conn:
            names = [row.name for row in conn.execute(sink.statement())]
        assert names == ["Ali", "Alice"]
