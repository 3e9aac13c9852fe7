"""Tests for Rich Console factory and theme."""

from io import StringIO

from lndclient.output.console import LND_THEME, create_console, get_output, style_for_field


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[lnd.error]boom[/lnd.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "boom" in output

    def test_default_width(self) -> None:
        assert create_console().width == 120

    def test_custom_width(self) -> None:
        assert create_console(width=80).width == 80


class TestTheme:
    def test_has_result_styles(self) -> None:
        for name in ("lnd.ok", "lnd.error", "lnd.warning", "lnd.op", "lnd.pubkey"):
            assert name in LND_THEME.styles


class TestGetOutput:
    def test_extracts_printed_text(self) -> None:
        console = create_console(no_color=True)
        console.print("hello lnd")
        assert "hello lnd" in get_output(console)

    def test_empty_console(self) -> None:
        assert get_output(create_console()) == ""


class TestStyleForField:
    def test_known_fields(self) -> None:
        assert style_for_field("pubkey") == "lnd.pubkey"
        assert style_for_field("clients") == "lnd.client"

    def test_unknown_field_unstyled(self) -> None:
        assert style_for_field("alias") == ""
