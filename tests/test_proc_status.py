import pytest

from procfs.proc_status import ProcStatus, parse_proc_status

STATUS_26231 = """Name:\tprometheus
Umask:\t0022
State:\tS (sleeping)
Tgid:\t26231
Ngid:\t0
Pid:\t26231
PPid:\t1
TracerPid:\t0
Uid:\t0\t0\t0\t0
Gid:\t0\t0\t0\t0
FDSize:\t128
Groups:\t
NStgid:\t1
NSpid:\t1
NSpgid:\t1
NSsid:\t1
VmPeak:\t   58472 kB
VmSize:\t   58440 kB
VmLck:\t       0 kB
VmPin:\t       0 kB
VmHWM:\t    8028 kB
VmRSS:\t    6716 kB
RssAnon:\t    2092 kB
RssFile:\t    4624 kB
RssShmem:\t       0 kB
VmData:\t    2580 kB
VmStk:\t     136 kB
VmExe:\t     948 kB
VmLib:\t    6816 kB
VmPTE:\t     128 kB
VmPMD:\t      12 kB
VmSwap:\t     660 kB
HugetlbPages:\t       0 kB
Threads:\t1
SigQ:\t8/63965
SigPnd:\t0000000000000000
Cpus_allowed_list:\t0-7
voluntary_ctxt_switches:\t4742839
nonvoluntary_ctxt_switches:\t1727500
"""


@pytest.fixture
def status():
    return parse_proc_status(26231, STATUS_26231)


@pytest.mark.parametrize(
    "attribute, expected",
    [
        ("pid", 26231),
        ("tgid", 26231),
        ("vm_peak", 58472 * 1024),
        ("vm_size", 58440 * 1024),
        ("vm_lck", 0),
        ("vm_pin", 0),
        ("vm_hwm", 8028 * 1024),
        ("vm_rss", 6716 * 1024),
        ("rss_anon", 2092 * 1024),
        ("rss_file", 4624 * 1024),
        ("rss_shmem", 0),
        ("vm_data", 2580 * 1024),
        ("vm_stk", 136 * 1024),
        ("vm_exe", 948 * 1024),
        ("vm_lib", 6816 * 1024),
        ("vm_pte", 128 * 1024),
        ("vm_pmd", 12 * 1024),
        ("vm_swap", 660 * 1024),
        ("hugetlb_pages", 0),
        ("voluntary_ctxt_switches", 4742839),
        ("nonvoluntary_ctxt_switches", 1727500),
    ],
)
def test_proc_status_fields(status, attribute, expected):
    assert getattr(status, attribute) == expected


def test_total_ctxt_switches(status):
    assert status.total_ctxt_switches() == 4742839 + 1727500


def test_proc_status_name(status):
    assert status.name == "prometheus"


def test_from_bytes():
    status = parse_proc_status(7, b"Name:\tbash\nVmRSS:\t 10 kB\n")
    assert status == ProcStatus(pid=7, name="bash", vm_rss=10240)


def test_lines_without_colon_are_ignored():
    status = parse_proc_status(3, "garbage line\nTgid:\t3\n\n")
    assert status.tgid == 3
    assert status.name == ""


def test_non_numeric_value_gives_zero():
    status = parse_proc_status(1, "VmSize:\tlots kB\n")
    assert status.vm_size == 0


def test_empty_status():
    assert parse_proc_status(9, "") == ProcStatus(pid=9)