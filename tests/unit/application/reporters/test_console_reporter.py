"""Tests for application/reporters/console.py."""

import pytest

from namedclosure.application.reporters import ConsoleConfig, ConsoleReporter
from namedclosure.domain.call_shape import UnsupportedReason
from tests.factories import expand, plain


class TestConsoleConfig:
    def test_defaults(self) -> None:
        config = ConsoleConfig()
        assert config.only_unsupported is False
        assert config.show_source is True
        assert config.width == 120

    def test_narrow_width_raises(self) -> None:
        with pytest.raises(ValueError, match="width"):
            ConsoleConfig(width=20)


class TestConsoleReporter:
    def test_header_counts(self) -> None:
        result = expand("a = named_closure(c.m())\nb = named_closure(items[0])\n")
        output = plain(ConsoleReporter().report([result]))
        assert "2 marker call(s) in 1 file(s)" in output
        assert "1 unsupported" in output

    def test_site_rows(self) -> None:
        result = expand("a = named_closure(c.m())\n")
        output = plain(ConsoleReporter().report([result]))
        assert "INSTANCE_METHOD" in output
        assert "c.m()" in output

    def test_reason_shown(self) -> None:
        result = expand("a = named_closure(items[0])\n")
        output = plain(ConsoleReporter().report([result]))
        assert UnsupportedReason.NOT_A_CALL.value in output

    def test_brackets_not_markup(self) -> None:
        result = expand("a = named_closure(items[0])\n")
        assert "items[0]" in plain(ConsoleReporter().report([result]))

    def test_no_markers(self) -> None:
        output = plain(ConsoleReporter().report([expand("x = 1\n")]))
        assert "no marker calls" in output

    def test_only_unsupported(self) -> None:
        result = expand("a = named_closure(free())\n")
        output = plain(ConsoleReporter(ConsoleConfig(only_unsupported=True)).report([result]))
        assert "free()" not in output
        assert "no marker calls" in output

    def test_hide_source(self) -> None:
        result = expand("a = named_closure(c.method_with_long_name())\n")
        output = plain(ConsoleReporter(ConsoleConfig(show_source=False)).report([result]))
        assert "c.method_with_long_name()" not in output
        assert "method_with_long_name" in output

    def test_empty_results(self) -> None:
        assert "0 marker call(s) in 0 file(s)" in plain(ConsoleReporter().report([]))
