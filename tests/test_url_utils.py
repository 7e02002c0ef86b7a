"""Unit tests for URL detection, unwrapping and cleaning."""

import pytest
from urllib.parse import quote
from tiktoktrim.models import FailureReason
from tiktoktrim.url_utils import (
    UrlNormalizer,
    extract_first_url,
    is_short_link,
    normalize_url,
)


LOGIN_URL = (
    "https://www.tiktok.com/login?redirect_url="
    "https%3A%2F%2Fwww.tiktok.com%2F%40user%2Fvideo%2F123"
)


class TestNormalizeUrl:
    """Test suite for the full normalization pipeline."""

    def test_strips_tracking_param_keeps_order(self):
        url = "https://x.tiktok.com/v?a=1&_t=abc&b=2"
        assert normalize_url(url) == "https://x.tiktok.com/v?a=1&b=2"

    def test_strips_fragment(self):
        url = "https://x.tiktok.com/v?a=1#frag"
        assert normalize_url(url) == "https://x.tiktok.com/v?a=1"

    def test_unwraps_login_page(self):
        assert normalize_url(LOGIN_URL) == "https://www.tiktok.com/@user/video/123"

    def test_login_unwrap_then_tracking_strip(self):
        url = (
            "https://www.tiktok.com/login?redirect_url="
            "https%3A%2F%2Fwww.tiktok.com%2F%40user%2Fvideo%2F123%3F_t%3Dxyz%26lang%3Den"
            "&enter_from=video"
        )
        assert normalize_url(url) == "https://www.tiktok.com/@user/video/123?lang=en"

    def test_non_platform_url_passthrough(self):
        url = "https://example.com/?_t=abc"
        assert normalize_url(url) == url

    def test_non_platform_url_is_byte_identical(self):
        url = "HTTPS://Example.com/Path?_t=1&a=%7e#frag"
        assert normalize_url(url) is url

    def test_domain_marker_is_case_sensitive(self):
        url = "https://www.TIKTOK.COM/@user/video/1?_t=abc"
        assert normalize_url(url) == url

    def test_clean_url_returned_unchanged(self):
        url = "https://www.tiktok.com/@user/video/123?lang=en&is_from_webapp=1"
        assert normalize_url(url) == url

    def test_only_tracking_param_drops_question_mark(self):
        url = "https://www.tiktok.com/@user/video/123?_t=8abc"
        assert normalize_url(url) == "https://www.tiktok.com/@user/video/123"

    def test_repeated_tracking_params_all_removed(self):
        url = "https://www.tiktok.com/v?_t=1&a=2&_t=3"
        assert normalize_url(url) == "https://www.tiktok.com/v?a=2"

    def test_tracking_param_match_is_exact(self):
        url = "https://www.tiktok.com/v?_T=1&_tt=2&t=3"
        assert normalize_url(url) == url

    def test_surviving_params_keep_encoding(self):
        url = "https://www.tiktok.com/v?q=a%20b&x=%2F&_t=1"
        assert normalize_url(url) == "https://www.tiktok.com/v?q=a%20b&x=%2F"

    def test_login_page_without_redirect_param(self):
        url = "https://www.tiktok.com/login?lang=en&_t=abc"
        assert normalize_url(url) == "https://www.tiktok.com/login?lang=en"

    def test_login_redirect_to_other_host_is_still_cleaned(self):
        url = "https://www.tiktok.com/login?redirect_url=https%3A%2F%2Fexample.com%2Fa%3F_t%3D1%23x"
        assert normalize_url(url) == "https://example.com/a"

    def test_login_unwrap_is_single_pass(self):
        inner = "https://www.tiktok.com/login?redirect_url=https%3A%2F%2Fwww.tiktok.com%2F%40u"
        outer = "https://www.tiktok.com/login?redirect_url=" + quote(inner, safe="")
        # One unwrap yields the inner login URL, which is not unwrapped again
        assert normalize_url(outer) == inner

    def test_unparseable_url_returned_as_is(self):
        url = "https://[::1.tiktok.com/v?_t=1"
        assert normalize_url(url) == url

    def test_empty_string(self):
        assert normalize_url("") == ""

    @pytest.mark.parametrize(
        "url",
        [
            "https://x.tiktok.com/v?a=1&_t=abc&b=2",
            "https://x.tiktok.com/v?a=1#frag",
            LOGIN_URL,
            "https://example.com/?_t=abc",
            "https://www.tiktok.com/@user/video/123?_t=8abc&_r=1#comments",
            "not a url at all",
        ],
    )
    def test_idempotent(self, url):
        once = normalize_url(url)
        assert normalize_url(once) == once


class TestUrlNormalizerSteps:
    """Test suite for the individual pipeline steps."""

    def setup_method(self):
        self.normalizer = UrlNormalizer()

    def test_unwrap_ignores_non_login_path(self):
        url = "https://www.tiktok.com/@user?redirect_url=https%3A%2F%2Fexample.com"
        result = self.normalizer.unwrap_login_page(url)
        assert result.ok
        assert result.url == url

    def test_unwrap_reports_parse_failure(self):
        url = "https://[bad/login?redirect_url=x"
        result = self.normalizer.unwrap_login_page(url)
        assert result.failure == FailureReason.PARSE_ERROR
        assert result.url == url
        assert result.step == "login_unwrap"

    def test_strip_reports_parse_failure(self):
        url = "https://[bad/v?_t=1"
        result = self.normalizer.strip_tracking_params(url)
        assert result.failure == FailureReason.PARSE_ERROR
        assert result.url == url

    def test_failed_step_keeps_last_good_string(self):
        # Unwrap succeeds, but the extracted URL cannot be parsed by the strip step
        url = "https://www.tiktok.com/login?redirect_url=https%3A%2F%2F%5Bbad%2Fv%3F_t%3D1"
        assert self.normalizer.normalize(url) == "https://[bad/v?_t=1"

    def test_custom_tracking_param(self):
        normalizer = UrlNormalizer(tracking_param="utm_source")
        url = "https://www.tiktok.com/v?utm_source=x&_t=1"
        assert normalizer.normalize(url) == "https://www.tiktok.com/v?_t=1"

    def test_is_platform_url(self):
        assert self.normalizer.is_platform_url("https://m.tiktok.com/v/1")
        assert not self.normalizer.is_platform_url("https://example.com/tiktok.com")
        assert not self.normalizer.is_platform_url("tiktok.com/no-scheme")


class TestIsShortLink:
    """Test suite for short link detection."""

    def test_short_link_host(self):
        assert is_short_link("https://vm.tiktok.com/ZMabc123/")

    def test_short_link_host_case_insensitive(self):
        assert is_short_link("https://VM.TikTok.com/ZMabc123/")

    def test_short_link_path_prefix(self):
        assert is_short_link("https://www.tiktok.com/t/ZT8abc/")

    def test_path_prefix_ignored_off_platform(self):
        assert not is_short_link("https://example.com/t/x")
        assert not is_short_link("https://blog.example.org/t/ZT8abc/")

    def test_regular_video_url(self):
        assert not is_short_link("https://www.tiktok.com/@user/video/123")

    def test_malformed_url(self):
        assert not is_short_link("https://[bad/t/x")


class TestExtractFirstUrl:
    """Test suite for shared text intake."""

    def test_extracts_first_url(self):
        text = "Check this out! https://vm.tiktok.com/ZMabc/ and https://example.com"
        assert extract_first_url(text) == "https://vm.tiktok.com/ZMabc/"

    def test_case_insensitive_scheme(self):
        assert extract_first_url("see HTTP://vm.tiktok.com/x") == "HTTP://vm.tiktok.com/x"

    def test_no_url(self):
        assert extract_first_url("nothing to see here") is None

    def test_empty_text(self):
        assert extract_first_url("") is None
        assert extract_first_url(None) is None
