import unittest

from rdjson_viewer import InvalidFormatError, URLBuildError, URLParseError
from rdjson_viewer.url import VIEWER_BASE_URL, ReportFormat, ViewerLink, build_viewer_url, parse_viewer_url


class TestReportFormat(unittest.TestCase):
    def test_parse(self):
        self.assertIs(ReportFormat.parse("rdjson"), ReportFormat.RDJSON)
        self.assertIs(ReportFormat.parse("rdjsonl"), ReportFormat.RDJSONL)
        self.assertIs(ReportFormat.parse(ReportFormat.RDJSONL), ReportFormat.RDJSONL)

    def test_parse_invalid(self):
        for value in ("foo", "", "RDJSON", "sarif"):
            with self.subTest(value=value), self.assertRaises(InvalidFormatError):
                ReportFormat.parse(value)

    def test_invalid_format_is_value_error(self):
        with self.assertRaises(ValueError):
            ReportFormat.parse("foo")


class TestBuildViewerURL(unittest.TestCase):
    def test_rdjson(self):
        url = build_viewer_url("eJzLSM3JyQcABiwCFQ==", ReportFormat.RDJSON)
        self.assertEqual(url, "https://reviewdog.github.io/rdjson-viewer?rdjson=eJzLSM3JyQcABiwCFQ%3D%3D")
        self.assertNotIn("base_path_url", url)

    def test_rdjsonl(self):
        url = build_viewer_url("abc", "rdjsonl")
        self.assertEqual(url, f"{VIEWER_BASE_URL}?rdjsonl=abc")

    def test_invalid_format(self):
        with self.assertRaises(InvalidFormatError):
            build_viewer_url("abc", "foo")

    def test_base_path_url(self):
        url = build_viewer_url("abc", ReportFormat.RDJSON, "https://example.com")
        self.assertEqual(url, f"{VIEWER_BASE_URL}?base_path_url=https%3A%2F%2Fexample.com&rdjson=abc")

    def test_empty_base_path_url_omitted(self):
        self.assertNotIn("base_path_url", build_viewer_url("abc", ReportFormat.RDJSON, ""))

    def test_base64_symbols_escaped(self):
        url = build_viewer_url("a+b/c=", ReportFormat.RDJSON)
        self.assertTrue(url.endswith("?rdjson=a%2Bb%2Fc%3D"))

    def test_plus_replaced(self):
        url = build_viewer_url("abc", ReportFormat.RDJSON, "https://example.com/my repo/x+y")
        self.assertNotIn("+", url)
        self.assertIn("base_path_url=https%3A%2F%2Fexample.com%2Fmy%20repo%2Fx%2By", url)

    def test_malformed_endpoint(self):
        for endpoint in ("", "reviewdog.github.io/rdjson-viewer", "https://"):
            with self.subTest(endpoint=endpoint), self.assertRaises(URLBuildError):
                build_viewer_url("abc", ReportFormat.RDJSON, endpoint=endpoint)

    def test_endpoint_query_kept(self):
        url = build_viewer_url("abc", ReportFormat.RDJSON, endpoint="https://example.com/viewer?theme=dark")
        self.assertEqual(url, "https://example.com/viewer?rdjson=abc&theme=dark")


class TestParseViewerURL(unittest.TestCase):
    def test_parse(self):
        url = build_viewer_url("a+b/c=", ReportFormat.RDJSONL, "https://example.com/my repo")
        self.assertEqual(
            parse_viewer_url(url),
            ViewerLink(ReportFormat.RDJSONL, "a+b/c=", "https://example.com/my repo"),
        )

    def test_no_base_path(self):
        link = parse_viewer_url(build_viewer_url("abc", ReportFormat.RDJSON))
        self.assertEqual(link.base_path_url, "")

    def test_rdjson_takes_precedence(self):
        link = parse_viewer_url(f"{VIEWER_BASE_URL}?rdjsonl=bbb&rdjson=aaa")
        self.assertEqual(link.format, ReportFormat.RDJSON)
        self.assertEqual(link.payload, "aaa")

    def test_missing_payload(self):
        for url in (VIEWER_BASE_URL, f"{VIEWER_BASE_URL}?rdjson=", f"{VIEWER_BASE_URL}?base_path_url=x"):
            with self.subTest(url=url), self.assertRaises(URLParseError):
                parse_viewer_url(url)


if __name__ == "__main__":
    unittest.main()
