"""Unit tests for settings loading"""

from airtime_gateway.config import Settings


def test_cors_origins_default_allows_any(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    assert Settings(_env_file=None).cors_origin_list == ["*"]


def test_cors_origins_from_plain_env_value(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "*")
    assert Settings(_env_file=None).cors_origin_list == ["*"]


def test_cors_origins_comma_separated(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://grant.example.ng, https://admin.example.ng,")
    assert Settings(_env_file=None).cors_origin_list == [
        "https://grant.example.ng",
        "https://admin.example.ng",
    ]
