"""Tests for version parsing and the tiered driver release resolver."""

from unittest.mock import MagicMock

import pytest

from errors import InvalidVersionError, TransportError
from versioning.parser import extract_version, is_release_identifier, parse_version
from versioning.resolver import DriverVersionResolver

BASE = "https://lookup.example"


def _response(status_code, text=""):
    res = MagicMock()
    res.status_code = status_code
    res.text = text
    return res


def _resolver(responses):
    """Resolver whose HTTP layer serves responses keyed by URL."""
    calls = []

    def fake_get(url, *, context):
        calls.append(url)
        outcome = responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return DriverVersionResolver(BASE, http_get=fake_get), calls


PATCH_URL = f"{BASE}/LATEST_RELEASE_114.0.5735"
MAJOR_URL = f"{BASE}/LATEST_RELEASE_114"


class TestParseVersion:
    """Tests for parse_version and the derived lookup keys."""

    def test_four_components(self):
        v = parse_version("114.0.5735.90")
        assert v.patch_key == "114.0.5735"
        assert v.major_key == "114"
        assert v.components == ("114", "0", "5735", "90")

    def test_three_components_is_valid(self):
        v = parse_version("99.1.2")
        assert v.patch_key == "99.1.2"
        assert v.major_key == "99"

    def test_strips_whitespace(self):
        assert parse_version(" 114.0.5735.90\n").raw == "114.0.5735.90"

    @pytest.mark.parametrize("raw", ["", "114", "114.0", "114.0.x.1", None])
    def test_invalid_versions_raise(self, raw):
        with pytest.raises(InvalidVersionError):
            parse_version(raw)


class TestExtractVersion:
    """Tests for pulling a version out of --version output."""

    def test_google_chrome_output(self):
        assert extract_version("Google Chrome 114.0.5735.90 \n") == "114.0.5735.90"

    def test_chromium_output_with_suffix(self):
        out = "Chromium 113.0.5672.126 built on Debian 12.0, running on Debian 12.0"
        assert extract_version(out) == "113.0.5672.126"

    def test_requires_three_groups(self):
        assert extract_version("Chrome 114.0 beta") is None

    def test_empty_output(self):
        assert extract_version("") is None


class TestResolve:
    """Tests for the patch-then-major fallback."""

    def test_patch_hit_short_circuits(self):
        resolver, calls = _resolver({PATCH_URL: _response(200, "114.0.5735.90")})
        assert resolver.resolve(parse_version("114.0.5735.198")) == "114.0.5735.90"
        assert calls == [PATCH_URL]

    def test_patch_not_found_falls_back_to_major(self):
        resolver, calls = _resolver({
            PATCH_URL: _response(404, "<Error>NoSuchKey</Error>"),
            MAJOR_URL: _response(200, "114.0.5735.90\n"),
        })
        assert resolver.resolve(parse_version("114.0.5735.198")) == "114.0.5735.90"
        assert calls == [PATCH_URL, MAJOR_URL]

    def test_both_not_found_returns_none(self):
        resolver, calls = _resolver({
            PATCH_URL: _response(404),
            MAJOR_URL: _response(404),
        })
        assert resolver.resolve(parse_version("114.0.5735.198")) is None
        assert calls == [PATCH_URL, MAJOR_URL]

    def test_transport_error_on_patch_aborts(self):
        resolver, calls = _resolver({
            PATCH_URL: TransportError("connection refused"),
            MAJOR_URL: _response(200, "114.0.5735.90"),
        })
        with pytest.raises(TransportError):
            resolver.resolve(parse_version("114.0.5735.198"))
        assert calls == [PATCH_URL]

    def test_server_error_is_not_treated_as_not_found(self):
        resolver, calls = _resolver({
            PATCH_URL: _response(500, "oops"),
            MAJOR_URL: _response(200, "114.0.5735.90"),
        })
        with pytest.raises(TransportError):
            resolver.resolve(parse_version("114.0.5735.198"))
        assert calls == [PATCH_URL]

    def test_malformed_body_aborts(self):
        resolver, _ = _resolver({PATCH_URL: _response(200, "<html>captive portal</html>")})
        with pytest.raises(TransportError):
            resolver.resolve(parse_version("114.0.5735.198"))

    def test_empty_body_aborts(self):
        resolver, _ = _resolver({PATCH_URL: _response(200, "")})
        with pytest.raises(TransportError):
            resolver.resolve(parse_version("114.0.5735.198"))

    def test_base_url_trailing_slash(self):
        calls = []

        def fake_get(url, *, context):
            calls.append(url)
            return _response(200, "114.0.5735.90")

        DriverVersionResolver(BASE + "/", http_get=fake_get).latest_for("114")
        assert calls == [MAJOR_URL]


class TestReleaseIdentifier:
    def test_accepts_dotted_numbers(self):
        assert is_release_identifier("114.0.5735.90")

    def test_rejects_text(self):
        assert not is_release_identifier("not found")
