"""Tests for address splitting and composition."""

import pytest

from mailctl.domain.addresses import compose_email, split_address


class TestSplitAddress:
    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            ("alias@test.com", ("alias", "test.com")),
            ("alias", ("alias", None)),
            ("alias@", ("alias", None)),
            ("@test.com", ("", "test.com")),
            ("a@b@c", ("a", "b@c")),
        ],
    )
    def test_split(self, address: str, expected: tuple[str, str | None]) -> None:
        assert split_address(address) == expected


class TestComposeEmail:
    def test_plain_name(self) -> None:
        assert compose_email("test1", "test.com") == ("test1@test.com", "test.com")

    def test_embedded_domain_wins(self) -> None:
        assert compose_email("bob@a.org", "b.org") == ("bob@a.org", "a.org")

    def test_empty_default_domain(self) -> None:
        assert compose_email("bob", "") == ("bob@", "")
