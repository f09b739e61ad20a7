# examples/main.py
"""
sift-py: Serve a filterable `/users` endpoint backed by an in-memory SQLite table.

Run with `uvicorn examples.main:app` and try
`/users?name[sw]=Al&age[gte]=18&order_by[desc]=age&limit=10`.
"""

from typing import Any, Dict, List

from fastapi import Depends, FastAPI
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from sift import FilterModel, FilterShape, SiftConfig, TextClauseSink, apply_filters, log
from sift.api import configure_error_handlers, filter_dependency
from sift.ui import display_shape

# ? Database ------------------------------------------------------------------------------------------

engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
)

with engine.begin() as conn:
    conn.execute(text("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, age INTEGER, is_active BOOLEAN)"))
    conn.execute(
        text("INSERT INTO users (name, age, is_active) VALUES (:name, :age, :is_active)"),
        [
            {"name": "Alice", "age": 31, "is_active": True},
            {"name": "Alina", "age": 17, "is_active": True},
            {"name": "Bob", "age": 45, "is_active": False},
        ],
    )

# ? Filters -------------------------------------------------------------------------------------------

config = SiftConfig(max_limit=100, default_limit=20, log_level="DEBUG")
log.setup(config.log_level)

user_shape = (
    FilterShape.builder("UserFilter", table="users")
    .string("name")
    .number("age", int)
    .equal("active", bool, column="is_active")
    .skip("password")
    .build()
)

log.section("Filter shapes")
display_shape(user_shape)

# ? App -----------------------------------------------------------------------------------------------

app = FastAPI(title="sift example")
configure_error_handlers(app)


@app.get("/users")
def list_users(filters: FilterModel = Depends(filter_dependency(user_shape, config))) -> List[Dict[str, Any]]:
    sink = apply_filters(
        filters, TextClauseSink.from_config(config, "SELECT id, name, age, is_active FROM users WHERE 1=1")
    )
    with engine.connect() as conn:
        return [dict(row._mapping) for row in conn.execute(sink.statement())]
