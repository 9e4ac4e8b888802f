"""
Re-exports the "jdbc" handler under another protocol's module name. Discovery must not
register it for "odbc".
"""
from subproto.testing.jdbc import Handler  # noqa: F401
