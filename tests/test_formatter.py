"""test_formatter.py - Unit tests for TextFormatter and its helpers.

Covers:
    - prefix_field_clashes() renames time/msg/level without mutating input
    - format_value() rules for str, bool, None, numbers and other objects
    - is_terminal() for TTY-like, plain and closed streams
    - Plain mode: exact layout, structural fields first, container order after
    - Plain mode: user "time" field rendered as fields.time
    - Plain mode: string escaping, non-ASCII text and non-string values
    - Colour mode: selected by force_colors or TTY, suppressed by disable_colors
    - Colour mode: level colour and four-character level text per level
    - Colour mode: padded message and sorted fields
    - show_line_num adds caller=<file:line> of the log call
"""

import inspect
import io
from datetime import datetime, timezone

import pytest

import fieldlog.formatter as formatter_module
from fieldlog.entry import Entry
from fieldlog.formatter import (
    TextFormatter,
    format_value,
    is_terminal,
    prefix_field_clashes,
)
from fieldlog.level import Level
from fieldlog.logger import Logger


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _TTYStream(io.StringIO):
    def isatty(self):
        return True


def _stamped(data, level=Level.INFO, msg="hello", out=None):
    """Return an Entry stamped as if emitted at 2024-01-01T00:00:00Z."""
    entry = Entry(Logger(out=out if out is not None else io.StringIO()), data)
    entry.time = datetime(2024, 1, 1, tzinfo=timezone.utc)
    entry.level = level
    entry.message = msg
    return entry


def _plain(entry) -> str:
    return TextFormatter(disable_colors=True).format(entry).decode("utf-8")


# ---------------------------------------------------------------------------
# Helpers under test
# ---------------------------------------------------------------------------


class TestPrefixFieldClashes:
    def test_reserved_keys_are_prefixed(self):
        """time, msg and level move to fields.<key>."""
        resolved = prefix_field_clashes({"time": 1, "msg": 2, "level": 3, "user": "bob"})
        assert resolved == {"fields.time": 1, "fields.msg": 2, "fields.level": 3, "user": "bob"}

    def test_input_is_not_mutated(self):
        """The caller's mapping keeps its original keys."""
        data = {"time": "yesterday"}
        prefix_field_clashes(data)
        assert data == {"time": "yesterday"}

    def test_no_clash_returns_equal_copy(self):
        """Without reserved keys the result equals, but is not, the input."""
        data = {"user": "bob"}
        resolved = prefix_field_clashes(data)
        assert resolved == data
        assert resolved is not data


class TestFormatValue:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("bob", '"bob"'),
            ('say "hi"', '"say \\"hi\\""'),
            ("a\nb", '"a\\nb"'),
            (True, "true"),
            (False, "false"),
            (None, "<nil>"),
            (42, "42"),
            (1.5, "1.5"),
            (ValueError("bad input"), "bad input"),
        ],
    )
    def test_format_value_quoted(self, value, expected):
        """Strings are JSON-quoted; other types follow their own rule."""
        assert format_value(value) == expected

    def test_format_value_unquoted_string(self):
        """quote=False leaves strings as-is."""
        assert format_value('say "hi"', quote=False) == 'say "hi"'


class TestIsTerminal:
    def test_tty_stream(self):
        assert is_terminal(_TTYStream()) is True

    def test_plain_stream(self):
        assert is_terminal(io.StringIO()) is False

    def test_stream_without_isatty(self):
        assert is_terminal(object()) is False

    def test_closed_stream(self):
        """A closed stream raises ValueError from isatty(); treated as False."""
        stream = io.StringIO()
        stream.close()
        assert is_terminal(stream) is False


# ---------------------------------------------------------------------------
# Plain mode
# ---------------------------------------------------------------------------


class TestPlainMode:
    def test_plain_exact_layout(self):
        """Structural fields first, then user fields, one trailing newline."""
        out = _plain(_stamped({"user": "bob"}))
        assert out == 'time="2024-01-01T00:00:00Z" level=info msg="hello" user="bob"\n'

    def test_plain_keeps_container_order(self):
        """Non-reserved fields follow the order they were added in."""
        out = _plain(_stamped({"zeta": 1, "alpha": 2, "mid": 3}))
        assert out.endswith(" zeta=1 alpha=2 mid=3\n")

    def test_plain_user_time_field_is_prefixed(self):
        """A user field named time never shadows the structural time."""
        entry = _stamped({"time": "user-time"})
        out = _plain(entry)
        assert out == (
            'time="2024-01-01T00:00:00Z" level=info msg="hello" fields.time="user-time"\n'
        )
        assert entry.data == {"time": "user-time"}

    def test_plain_all_reserved_clashes(self):
        """msg and level clashes are renamed the same way."""
        out = _plain(_stamped({"msg": "mine", "level": 9}, level=Level.ERROR, msg="real"))
        assert out.startswith('time="2024-01-01T00:00:00Z" level=error msg="real" ')
        assert 'fields.msg="mine"' in out
        assert "fields.level=9" in out

    def test_plain_non_string_values(self):
        """Non-string values are rendered without quotes."""
        out = _plain(_stamped({"count": 3, "ok": True, "missing": None, "err": ValueError("bad")}))
        assert out.endswith(" count=3 ok=true missing=<nil> err=bad\n")

    def test_plain_escapes_message(self):
        """Quotes inside the message are escaped."""
        out = _plain(_stamped({}, msg='said "no"'))
        assert 'msg="said \\"no\\""' in out

    def test_plain_keeps_non_ascii_text(self):
        """Printable Unicode is written as-is, not as \\u escapes."""
        out = _plain(_stamped({"city": "Zürich"}, msg="héllo"))
        assert 'msg="héllo" city="Zürich"\n' in out

    def test_plain_selected_for_non_tty_by_default(self):
        """Default settings on a StringIO produce plain output."""
        out = TextFormatter().format(_stamped({})).decode("utf-8")
        assert "\x1b[" not in out
        assert out.startswith('time="')


# ---------------------------------------------------------------------------
# Colour mode
# ---------------------------------------------------------------------------


class TestColorMode:
    @pytest.fixture(autouse=True)
    def _freeze_clock(self, monkeypatch):
        monkeypatch.setattr(formatter_module, "mini_ts", lambda: 7)

    def test_color_exact_layout(self):
        """Level, elapsed seconds, padded message, then sorted fields."""
        entry = _stamped({"user": "bob", "attempt": 2})
        out = TextFormatter(force_colors=True).format(entry).decode("utf-8")
        assert out == (
            "\x1b[34mINFO\x1b[0m[0007] "
            + "hello".ljust(44)
            + " "
            + " \x1b[34mattempt\x1b[0m=2"
            + " \x1b[34muser\x1b[0m=bob"
            + "\n"
        )

    @pytest.mark.parametrize(
        "level, color, text",
        [
            (Level.DEBUG, 34, "DEBU"),
            (Level.INFO, 34, "INFO"),
            (Level.WARN, 33, "WARN"),
            (Level.ERROR, 31, "ERRO"),
            (Level.FATAL, 31, "FATA"),
            (Level.PANIC, 31, "PANI"),
        ],
    )
    def test_color_and_text_per_level(self, level, color, text):
        """warning is yellow, error/fatal/panic red, everything else blue."""
        out = TextFormatter(force_colors=True).format(_stamped({}, level=level))
        assert out.decode("utf-8").startswith(f"\x1b[{color}m{text}\x1b[0m[0007] ")

    def test_tty_output_is_colored(self):
        """A TTY output stream enables colours without force_colors."""
        out = TextFormatter().format(_stamped({}, out=_TTYStream()))
        assert out.startswith(b"\x1b[34mINFO")

    def test_disable_colors_wins(self):
        """disable_colors overrides both force_colors and a TTY."""
        fmt = TextFormatter(force_colors=True, disable_colors=True)
        out = fmt.format(_stamped({}, out=_TTYStream()))
        assert out.startswith(b'time="')

    def test_long_message_is_not_cut(self):
        """Messages longer than the column width are written in full."""
        msg = "x" * 60
        out = TextFormatter(force_colors=True).format(_stamped({}, msg=msg))
        assert msg.encode() in out


# ---------------------------------------------------------------------------
# Caller capture
# ---------------------------------------------------------------------------


class TestShowLineNum:
    def test_caller_field_points_at_log_call(self):
        """caller is the file and line of the logger call, not fieldlog internals."""
        out = io.StringIO()
        log = Logger(out=out, formatter=TextFormatter(disable_colors=True, show_line_num=True))
        line = inspect.currentframe().f_lineno + 1
        log.with_field("k", "v").info("where")
        assert f'caller="test_formatter.py:{line}"' in out.getvalue()

    def test_caller_absent_by_default(self):
        out = io.StringIO()
        Logger(out=out).info("where")
        assert "caller=" not in out.getvalue()
