import pytest

from galog.constants import PARAM_NAME_PATTERN
from galog.translate.names import NameSanitizer


@pytest.mark.unit
class TestNameSanitizer:
    def setup_method(self):
        self.sanitizer = NameSanitizer(max_length=40)

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("user_id", "user_id"),
            ("user name", "user_name"),
            ("a.b-c", "a_b_c"),
            ("1st", "p_1st"),
            ("_private", "p__private"),
            ("", "p"),
            ("   ", "p"),
            (None, "p"),
            ("é", "p__"),
            ("RequestPath", "RequestPath"),
        ],
    )
    def test_sanitize(self, raw, expected):
        assert self.sanitizer.sanitize(raw) == expected

    def test_truncates_to_max_length(self):
        assert self.sanitizer.sanitize("a" * 50) == "a" * 40

    def test_prefix_counts_towards_max_length(self):
        sanitizer = NameSanitizer(max_length=4)
        assert sanitizer.sanitize("9lives") == "p_9l"

    def test_formatter_is_applied_first(self):
        sanitizer = NameSanitizer(max_length=40, formatter=lambda name: name.lower())
        assert sanitizer.sanitize("UserId") == "userid"

    @pytest.mark.parametrize("formatted", ["", "   ", None])
    def test_blank_formatter_result_falls_back_to_raw(self, formatted):
        sanitizer = NameSanitizer(max_length=40, formatter=lambda name: formatted)
        assert sanitizer.sanitize("UserId") == "UserId"

    def test_formatter_output_is_sanitized(self):
        sanitizer = NameSanitizer(max_length=40, formatter=lambda name: f"app.{name}")
        assert sanitizer.sanitize("user") == "app_user"

    def test_deterministic(self):
        assert self.sanitizer.sanitize("some weird/name") == self.sanitizer.sanitize("some weird/name")

    @pytest.mark.parametrize("max_length", [1, 2, 5, 40])
    @pytest.mark.parametrize(
        "raw", ["", "0", "__", "a b c", "ünïcödé", "x" * 100, "$$$", "9" * 60, "Ok_1"]
    )
    def test_output_always_valid(self, raw, max_length):
        name = NameSanitizer(max_length=max_length).sanitize(raw)
        assert PARAM_NAME_PATTERN.match(name)
        assert len(name) <= max_length
