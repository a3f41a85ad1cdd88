"""Route Status Tables — every route maps every error kind, to the documented codes."""

import pytest

from catalog_api.api.status_tables import (
    CREATE_STATUS, DELETE_STATUS, DETAIL_STATUS, LIST_STATUS, PUBLISH_STATUS,
    _table,
)
from catalog_api.core.errors import ErrorKind


@pytest.mark.parametrize("table", [
    LIST_STATUS, DETAIL_STATUS, CREATE_STATUS, DELETE_STATUS, PUBLISH_STATUS,
], ids=["list", "detail", "create", "delete", "publish"])
def test_every_table_is_exhaustive(table):
    assert set(table) == set(ErrorKind)


def test_documented_failure_codes():
    assert LIST_STATUS[ErrorKind.VALIDATION] == 400
    assert DETAIL_STATUS[ErrorKind.NOT_FOUND] == 400
    assert CREATE_STATUS[ErrorKind.VALIDATION] == 400
    assert CREATE_STATUS[ErrorKind.AUTHENTICATION] == 400
    assert CREATE_STATUS[ErrorKind.AUTHORIZATION] == 400
    assert CREATE_STATUS[ErrorKind.CONFLICT] == 400
    assert DELETE_STATUS[ErrorKind.NOT_FOUND] == 409
    assert DELETE_STATUS[ErrorKind.CONFLICT] == 409
    assert PUBLISH_STATUS[ErrorKind.NOT_FOUND] == 404


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        LIST_STATUS[ErrorKind.STORE] = 500


def test_incomplete_table_is_rejected():
    with pytest.raises(ValueError):
        _table(validation=400)
