"""Tests for scraped job description cleanup."""

from portfolio_api.parsers.jd_parser import parse_jd


class TestParseJd:
    def test_collapses_blank_lines(self):
        assert parse_jd("Title\n\n\n\n\nBody") == "Title\n\nBody"

    def test_collapses_inline_whitespace(self):
        assert parse_jd("Python   and\t\tSQL") == "Python and SQL"

    def test_strips_each_line(self):
        assert parse_jd("  one  \n   two ") == "one\ntwo"

    def test_normalizes_crlf_and_nbsp(self):
        assert parse_jd("a\r\nb\xa0c") == "a\nb c"

    def test_blank_page_is_empty(self):
        assert parse_jd(" \n\n \t \n") == ""

    def test_clean_text_unchanged(self, sample_jd_text):
        assert parse_jd(sample_jd_text) == sample_jd_text

    def test_bare_carriage_returns(self):
        assert parse_jd("Remote\rUS only") == "Remote\nUS only"
