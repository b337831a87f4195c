from types import SimpleNamespace

from blob_uploader.environment import EnvironmentSnapshot, static_probe
from blob_uploader.urls import build_upload_url, encode_uri_component, normalize_absolute_url


def test_download_url_wins_over_local_path():
    absolute = normalize_absolute_url("blobs/123", "https://example.com/data")
    assert absolute == "https://example.com/data"


def test_download_url_is_trimmed():
    assert normalize_absolute_url(None, "  https://cdn.test/x  ") == "https://cdn.test/x"


def test_blank_inputs_return_empty_string():
    assert normalize_absolute_url("", "") == ""
    assert normalize_absolute_url("   ", "  ") == ""
    assert normalize_absolute_url(None, None) == ""


def test_non_string_inputs_are_ignored():
    assert normalize_absolute_url(42, {"url": "x"}) == ""


def test_relative_path_without_origin():
    assert normalize_absolute_url("blobs/abc") == "/blobs/abc"
    assert normalize_absolute_url("/blobs/abc") == "/blobs/abc"


def test_origin_string_override():
    result = normalize_absolute_url("blobs/abc", None, "https://app.example.com/agents/page")
    assert result == "https://app.example.com/blobs/abc"


def test_location_object_with_origin():
    location = SimpleNamespace(origin="https://app.example.com")
    assert normalize_absolute_url("blobs/abc", None, location) == "https://app.example.com/blobs/abc"


def test_malformed_origin_falls_back_to_relative_path():
    assert normalize_absolute_url("blobs/abc", None, "not a url") == "/blobs/abc"


def test_probe_location_used_without_override():
    probe = static_probe(EnvironmentSnapshot(location="https://ui.example.com"))
    assert normalize_absolute_url("blobs/abc", probe=probe) == "https://ui.example.com/blobs/abc"


def test_override_skips_probe():
    calls = []

    def probe():
        calls.append(True)
        return EnvironmentSnapshot(location="https://ui.example.com")

    result = normalize_absolute_url("blobs/abc", None, "https://override.test", probe=probe)
    assert result == "https://override.test/blobs/abc"
    assert calls == []


def test_probe_without_environment_returns_relative_path():
    assert normalize_absolute_url("blobs/abc", probe=static_probe(None)) == "/blobs/abc"


def test_encode_uri_component_matches_component_rules():
    assert encode_uri_component("my file (1).png") == "my%20file%20(1).png"
    assert encode_uri_component("a/b?c=d") == "a%2Fb%3Fc%3Dd"
    assert encode_uri_component("über") == "%C3%BCber"
    assert encode_uri_component("x-_.!~*'") == "x-_.!~*'"


def test_build_upload_url_scopes_agent():
    assert build_upload_url("/blobs", "agent-one") == "/blobs/agent-one"
    assert build_upload_url("/blobs/", " team a ") == "/blobs/team%20a"
    assert build_upload_url("/blobs", "a/b") == "/blobs/a%2Fb"


def test_build_upload_url_defaults():
    assert build_upload_url("", "") == "/blobs"
    assert build_upload_url("   ", "agent") == "/blobs/agent"
    assert build_upload_url(None, None) == "/blobs"
    assert build_upload_url("https://files.test/upload/", "") == "https://files.test/upload"


def test_encode_uri_component_keeps_undecodable_filename_bytes():
    assert encode_uri_component("bad\udcff.txt") == "bad%FF.txt"
