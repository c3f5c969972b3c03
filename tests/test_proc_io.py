import pytest

from procfs.proc_io import ProcIO, parse_proc_io

IO_TEXT = (
    "rchar: 750339\n"
    "wchar: 818609\n"
    "syscr: 7405\n"
    "syscw: 5245\n"
    "read_bytes: 1024\n"
    "write_bytes: 2048\n"
    "cancelled_write_bytes: -1024\n"
)


def test_proc_io_values():
    io = parse_proc_io(IO_TEXT)
    assert io.rchar == 750339
    assert io.wchar == 818609
    assert io.syscr == 7405
    assert io.syscw == 5245
    assert io.read_bytes == 1024
    assert io.write_bytes == 2048
    assert io.cancelled_write_bytes == -1024


def test_proc_io_without_final_newline():
    assert parse_proc_io(IO_TEXT.rstrip("\n")) == ProcIO(
        750339, 818609, 7405, 5245, 1024, 2048, -1024
    )


def test_proc_io_missing_field():
    with pytest.raises(ValueError):
        parse_proc_io("rchar: 1\nwchar: 2\n")


def test_proc_io_negative_unsigned():
    with pytest.raises(ValueError):
        parse_proc_io(IO_TEXT.replace("rchar: 750339", "rchar: -1"))


def test_proc_io_out_of_range():
    with pytest.raises(ValueError, match="out of range"):
        parse_proc_io(IO_TEXT.replace("750339", "18446744073709551616"))