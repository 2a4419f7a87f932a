import unittest
from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

import httpx

from galog.meta import get_meta_http_headers, get_user_agent, get_version


class TestMeta(unittest.TestCase):
    """Test cases for the meta module."""

    def test_user_agent_starts_with_product_token(self):
        user_agent = get_user_agent()

        self.assertTrue(user_agent.startswith("galog/"))
        self.assertIn(f"httpx/{httpx.__version__}", user_agent)

    @patch("galog.meta.platform.release", return_value="6.8.0")
    @patch("galog.meta.platform.system", return_value="Linux")
    @patch("galog.meta.platform.python_version", return_value="3.12.1")
    @patch("galog.meta.platform.python_implementation", return_value="CPython")
    @patch("galog.meta.get_version", return_value="0.3.0")
    def test_user_agent_tokens(self, *_mocks):
        self.assertEqual(
            get_user_agent(),
            f"galog/0.3.0 httpx/{httpx.__version__} CPython/3.12.1 Linux/6.8.0",
        )

    @patch("galog.meta.platform.release", return_value="")
    @patch("galog.meta.platform.system", return_value="")
    @patch("galog.meta.get_version", return_value=None)
    def test_user_agent_without_version_or_host_details(self, *_mocks):
        user_agent = get_user_agent()

        self.assertTrue(user_agent.startswith("galog/dev "))
        self.assertTrue(user_agent.endswith(" unknown"))

    @patch("galog.meta.version", side_effect=PackageNotFoundError("galog"))
    def test_get_version_not_installed(self, _mock_version):
        self.assertIsNone(get_version())

    @patch("galog.meta.get_user_agent", return_value="galog/test")
    def test_get_meta_http_headers(self, _mock_user_agent):
        self.assertEqual(
            get_meta_http_headers(),
            {"User-Agent": "galog/test", "Accept": "application/json"},
        )


if __name__ == "__main__":
    unittest.main()
