"""Tests for domain name resolution."""

import pytest
from sqlalchemy import insert

from mailctl.errors import DomainLookupError, MissingDomainError
from mailctl.infrastructure.database.domains import resolve_domain_id
from mailctl.infrastructure.database.engine import MailDatabase
from mailctl.infrastructure.database.schema import virtual_domains


class TestResolveDomainId:
    def test_known_domain(self, database: MailDatabase) -> None:
        with database.transaction() as conn:
            assert resolve_domain_id(conn, "test.com") == 1

    def test_second_domain(self, database: MailDatabase) -> None:
        database.execute(insert(virtual_domains).values(id=9, name="other.org"))
        with database.transaction() as conn:
            assert resolve_domain_id(conn, "other.org") == 9

    def test_exact_match_only(self, database: MailDatabase) -> None:
        with database.transaction() as conn:
            with pytest.raises(DomainLookupError):
                resolve_domain_id(conn, "sub.test.com")

    def test_unknown_domain_message(self, database: MailDatabase) -> None:
        with database.transaction() as conn:
            with pytest.raises(DomainLookupError) as excinfo:
                resolve_domain_id(conn, "nope.org")
        assert excinfo.value.message == "Couldn't find domain nope.org"
        assert excinfo.value.domain == "nope.org"
        assert excinfo.value.code == "DOMAIN_NOT_FOUND"

    @pytest.mark.parametrize("name", ["", None])
    def test_missing_name(self, database: MailDatabase, name: str | None) -> None:
        with database.transaction() as conn:
            with pytest.raises(MissingDomainError, match="No domain provided"):
                resolve_domain_id(conn, name)
