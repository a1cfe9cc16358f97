"""Database-side salted password hashing as a SQL expression.

``SaltedHash(password)`` compiles to the server's own crypt primitive
with a freshly generated salt, so the plaintext only ever travels as a
bound parameter and mailctl never computes or reads back a hash.

MySQL/MariaDB::

    ENCRYPT(:password, CONCAT('$6$', SUBSTRING(SHA(RAND()), -16)))

SQLite has no crypt primitive; :func:`register_sqlite_functions` installs
an ``encrypt()`` function on each new connection for local scratch
databases and tests.  Its hashes carry :data:`SQLITE_HASH_PREFIX` instead
of ``$6$`` because Dovecot and other crypt(3) consumers cannot verify them.
"""

from __future__ import annotations

import hashlib
from typing import Any

from sqlalchemy import String
from sqlalchemy.exc import CompileError
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

SHA512_CRYPT_PREFIX = "$6$"
SQLITE_HASH_PREFIX = "$sqlite-sha512$"


class SaltedHash(FunctionElement):
    """SQL expression: salted one-way hash of a bound password."""

    name = "salted_hash"
    type = String()
    inherit_cache = True


@compiles(SaltedHash)
def _compile_default(element: SaltedHash, compiler: Any, **kw: Any) -> str:
    msg = f"No salted hash primitive for dialect {compiler.dialect.name!r}"
    raise CompileError(msg)


@compiles(SaltedHash, "mysql")
@compiles(SaltedHash, "mariadb")
def _compile_mysql(element: SaltedHash, compiler: Any, **kw: Any) -> str:
    password = compiler.process(element.clauses, **kw)
    return f"ENCRYPT({password}, CONCAT('{SHA512_CRYPT_PREFIX}', SUBSTRING(SHA(RAND()), -16)))"


@compiles(SaltedHash, "sqlite")
def _compile_sqlite(element: SaltedHash, compiler: Any, **kw: Any) -> str:
    password = compiler.process(element.clauses, **kw)
    salt = f"'{SQLITE_HASH_PREFIX}' || substr(lower(hex(randomblob(8))), 1, 16)"
    return f"encrypt({password}, {salt})"


def _sqlite_encrypt(password: str | None, salt: str | None) -> str | None:
    if password is None or salt is None:
        return None
    digest = hashlib.sha512(f"{salt}{password}".encode()).hexdigest()
    return f"{salt}${digest}"


def register_sqlite_functions(dbapi_conn: Any) -> None:
    """Install ``encrypt(password, salt)`` on a raw sqlite3 connection.

    For scratch databases and the test suite only.  The result is a salted
    SHA-512 hex digest, not a SHA512-CRYPT string: a mail server cannot
    authenticate against passwords written this way.
    """
    dbapi_conn.create_function("encrypt", 2, _sqlite_encrypt, deterministic=True)
