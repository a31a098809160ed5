"""
Pytest configuration and shared fixtures for LDAPStanding tests.
"""

import pytest

from ldapstanding.utils.logging import set_verbosity


@pytest.fixture(autouse=True)
def reset_verbosity(monkeypatch):
    """Quiet output and no debug environment switches for every test."""
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LDAPSTANDING_DEBUG", raising=False)
    set_verbosity(False, False)
    yield
    set_verbosity(False, False)


@pytest.fixture
def ad_user():
    """Attributes of an ordinary, healthy Active Directory user."""
    return {
        "sAMAccountName": ["jdoe"],
        "userAccountControl": ["512"],
        "accountExpires": ["9223372036854775807"],
    }
