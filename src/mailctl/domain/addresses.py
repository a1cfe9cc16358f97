"""Mail address helpers: splitting and composing ``local@domain``."""

from __future__ import annotations


def split_address(address: str) -> tuple[str, str | None]:
    """Split *address* on the first ``@`` into (local part, domain part).

    The domain part is None when *address* has no ``@`` or nothing after it.

    Examples:
        >>> split_address("alias@test.com")
        ('alias', 'test.com')
        >>> split_address("alias")
        ('alias', None)
        >>> split_address("alias@")
        ('alias', None)
    """
    local, sep, domain = address.partition("@")
    if not sep or not domain:
        return local, None
    return local, domain


def compose_email(name: str, default_domain: str) -> tuple[str, str]:
    """Build the full mailbox address for a ``-name`` value.

    A domain embedded in *name* wins over *default_domain*, so
    ``compose_email("bob@a.org", "b.org")`` is ``("bob@a.org", "a.org")``.

    Returns:
        ``(email, domain)`` where *domain* is the part the email was built with.
    """
    local, embedded = split_address(name)
    domain = embedded or default_domain
    return f"{local}@{domain}", domain
