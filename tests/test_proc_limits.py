import pytest

from procfs.proc_limits import ProcLimits, parse_limit_value, parse_limits

LIMITS = """Limit                     Soft Limit           Hard Limit           Units
Max cpu time              unlimited            unlimited            seconds
Max file size             unlimited            unlimited            bytes
Max data size             unlimited            unlimited            bytes
Max stack size            8388608              unlimited            bytes
Max core file size        0                    unlimited            bytes
Max resident set          unlimited            unlimited            bytes
Max processes             62898                62898                processes
Max open files            2048                 4096                 files
Max locked memory         65536                65536                bytes
Max address space         8589934592           unlimited            bytes
Max file locks            unlimited            unlimited            locks
Max pending signals       62898                62898                signals
Max msgqueue size         819200               819200               bytes
Max nice priority         0                    0
Max realtime priority     0                    0
Max realtime timeout      unlimited            unlimited            us
"""


def test_limits_fixture_values():
    limits = parse_limits(LIMITS)
    assert limits.cpu_time == -1
    assert limits.open_files == 2048
    assert limits.msgqueue_size == 819200
    assert limits.nice_priority == 0
    assert limits.address_space == 8589934592


def test_limits_other_values():
    limits = parse_limits(LIMITS.splitlines(keepends=True))
    assert limits.stack_size == 8388608
    assert limits.processes == 62898
    assert limits.realtime_timeout == -1


def test_limits_unknown_names_ignored():
    text = "Max something new        5                    5                    units\n"
    assert parse_limits(text) == ProcLimits()


def test_limits_malformed_line():
    with pytest.raises(ValueError, match="couldn't parse limits line"):
        parse_limits("Max cpu time unlimited\n")


def test_limits_bad_value():
    with pytest.raises(ValueError, match="couldn't parse value abc"):
        parse_limits("Max open files            abc                  4096                 files\n")


@pytest.mark.parametrize(
    "text, expected",
    [("unlimited", -1), ("0", 0), ("2048", 2048), ("-5", -5), ("+7", 7)],
)
def test_parse_limit_value(text, expected):
    assert parse_limit_value(text) == expected


@pytest.mark.parametrize("text", ["", "1.5", "x", "9223372036854775808"])
def test_parse_limit_value_errors(text):
    with pytest.raises(ValueError):
        parse_limit_value(text)