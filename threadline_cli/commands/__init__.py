"""
CLI command modules.
"""

from threadline_cli.commands import commit, statement, verify

__all__ = ["commit", "statement", "verify"]
