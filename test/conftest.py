# test/conftest.py
import pytest

from sift import FilterShape
from sift.core.logging import log


@pytest.fixture
def user_shape() -> FilterShape:
    return (
        FilterShape.builder("UserFilter")
        .string("name")
        .number("age", int)
        .equal("active", bool)
        .skip("password")
        .build()
    )


@pytest.fixture
def debug_logging():
    log.setup("DEBUG")
    yield log
    log.setup("WARNING")
