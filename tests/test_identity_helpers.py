"""Display helpers for the admin sidebar identity block."""

from __future__ import annotations

import hashlib

import pytest

from admin_portal.auth import format_role, get_initials, gravatar_url


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Ada Lovelace", "AL"),
        ("ada lovelace byron", "AB"),
        ("  grace   hopper ", "GH"),
        ("ada", "A"),
        ("ada@example.com", "A"),
        ("", "?"),
        ("   ", "?"),
    ],
)
def test_get_initials(name, expected):
    assert get_initials(name) == expected


@pytest.mark.parametrize(
    ("role", "expected"),
    [("admin", "Admin"), ("ADMIN", "Admin"), ("moderator", "Moderator"), ("", "User")],
)
def test_format_role(role, expected):
    assert format_role(role) == expected


def test_gravatar_url_normalizes_email():
    digest = hashlib.md5(b"ada@example.com").hexdigest()  # noqa: S324
    assert gravatar_url("  Ada@Example.COM ") == (
        f"https://use.sevencdn.com/avatar/{digest}?d=mp"
    )


def test_gravatar_url_custom_base():
    url = gravatar_url("ada@example.com", "https://avatars.example.org/")
    assert url.startswith("https://avatars.example.org/")
    assert "//" not in url.removeprefix("https://")
    assert url.endswith("?d=mp")
