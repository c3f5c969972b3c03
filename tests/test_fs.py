import os

import pytest

from procfs.fs import FS
from procfs.net_dev import NetDevLine
from procfs.net_unix import NetUnixLine
from procfs.proc import Proc

STAT = (
    "cpu  301854 612 111922 8979004 3552 2 3944 0 0 0\n"
    "cpu0 44490 19 21045 1087069 220 1 3410 0 0 0\n"
    "cpu7 28420 12 11820 1139750 341 0 31 0 0 0\n"
    "intr 8885917 17 0 0 0 0 0 0 0 1 79281\n"
    "ctxt 38014093\n"
    "btime 1418183276\n"
    "processes 26442\n"
    "procs_running 2\n"
    "procs_blocked 1\n"
    "softirq 5057579 250191 1481983 1647 211099 186066 0 1783454 622196 12499 508444\n"
)

NET_DEV = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed\n"
    "vethf345468:     648       8    0    0    0     0          0         0      438       5    0    0    0     0       0          0\n"
    "    lo: 1664039048 1566805    0    0    0     0          0         0 1664039048 1566805    0    0    0     0       0          0\n"
    "docker0:    2568      38    0    0    0     0          0         0      438       5    0    0    0     0       0          0\n"
    "  eth0: 874354587 1036395    0    0    0     0          0         0 563352563  732147    0    0    0     0       0          0\n"
)

SOFTNET = (
    "00015c73 00020e76 F0000769 00000000 00000000 00000000 00000000 00000000 00000000 00000000 00000000\n"
    "01663fb2 00000000 000109a4 00000000 00000000 00000000 00000000 00000000 00000000 00000000 00000000\n"
)

NET_UNIX = (
    "Num       RefCount Protocol Flags    Type St Inode Path\n"
    "0000000000000000: 00000002 00000000 00010000 0001 01 3442596 /var/run/postgresql/.s.PGSQL.5432\n"
    "0000000000000000: 0000000a 00000000 00010000 0005 01 10061 /run/udev/control\n"
    "0000000000000000: 00000007 00000000 00000000 0002 01 12392 /dev/log\n"
    "0000000000000000: 00000003 00000000 00000000 0001 03 4787297 /var/run/postgresql/.s.PGSQL.5432\n"
    "0000000000000000: 00000003 00000000 00000000 0001 03 5091797\n"
)

SOME = "some avg10=0.10 avg60=2.00 avg300=3.85 total=15\n"
FULL = "full avg10=0.20 avg60=3.00 avg300=4.95 total=25\n"

SCHEDSTAT = (
    "version 15\n"
    "cpu0 498494191 0 3533438552 2553969831 3853684107 2465731542 "
    "2045936778163039 98765432100 4767485306\n"
    "cpu1 303190 0 2112305 1026734 1165416 994433 1012344765432 44444444 6700434\n"
)


def _write(path, content):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as handle:
        handle.write(content)


@pytest.fixture
def fs(tmp_path):
    base = str(tmp_path)
    _write(os.path.join(base, "stat"), STAT)
    _write(os.path.join(base, "net", "dev"), NET_DEV)
    _write(os.path.join(base, "net", "softnet_stat"), SOFTNET)
    _write(os.path.join(base, "net", "unix"), NET_UNIX)
    _write(os.path.join(base, "pressure", "cpu"), SOME)
    _write(os.path.join(base, "pressure", "memory"), SOME + FULL)
    _write(os.path.join(base, "pressure", "io"), SOME + FULL)
    _write(os.path.join(base, "schedstat"), SCHEDSTAT)
    os.makedirs(os.path.join(base, "26231"))
    os.makedirs(os.path.join(base, "584"))
    os.symlink("26231", os.path.join(base, "self"))
    return FS(base)


def test_missing_mount_point(tmp_path):
    with pytest.raises(FileNotFoundError):
        FS(tmp_path / "missing")


def test_mount_point_not_directory(tmp_path):
    path = tmp_path / "file"
    path.write_text("x")
    with pytest.raises(NotADirectoryError):
        FS(path)


def test_path(fs):
    assert fs.path("net", "dev") == f"{fs.mount_point}/net/dev"


def test_self(fs):
    assert fs.self_process() == fs.proc(26231)
    assert fs.self_process() == Proc(26231, fs.mount_point)


def test_proc_missing(fs):
    with pytest.raises(FileNotFoundError):
        fs.proc(99999)


def test_all_procs(fs):
    assert [proc.pid for proc in sorted(fs.all_procs())] == [584, 26231]


def test_stat(fs):
    stat = fs.stat()
    assert stat.cpu_total.user == 301854 / 100
    assert stat.cpu[7].softirq == 31 / 100
    assert stat.irq_total == 8885917
    assert stat.irq[8] == 1
    assert stat.context_switches == 38014093
    assert stat.boot_time == 1418183276
    assert stat.process_created == 26442
    assert stat.processes_running == 2
    assert stat.processes_blocked == 1
    assert stat.softirq_total == 5057579
    assert stat.softirq.rcu == 508444


def test_net_dev(fs):
    assert fs.net_dev() == {
        "vethf345468": NetDevLine(name="vethf345468", rx_bytes=648, rx_packets=8, tx_bytes=438, tx_packets=5),
        "lo": NetDevLine(name="lo", rx_bytes=1664039048, rx_packets=1566805, tx_bytes=1664039048, tx_packets=1566805),
        "docker0": NetDevLine(name="docker0", rx_bytes=2568, rx_packets=38, tx_bytes=438, tx_packets=5),
        "eth0": NetDevLine(name="eth0", rx_bytes=874354587, rx_packets=1036395, tx_bytes=563352563, tx_packets=732147),
    }


def test_softnet(fs):
    entries = fs.gather_softnet_stats()
    assert entries[0].processed == 0x00015C73
    assert entries[0].dropped == 0x00020E76
    assert entries[0].time_squeezed == 0xF0000769
    assert len(entries) == 2


def test_net_unix(fs):
    rows = fs.net_unix().rows
    ptr = "0000000000000000"
    assert rows == [
        NetUnixLine(ptr, 2, 0, 1 << 16, 1, 1, 3442596, "/var/run/postgresql/.s.PGSQL.5432"),
        NetUnixLine(ptr, 10, 0, 1 << 16, 5, 1, 10061, "/run/udev/control"),
        NetUnixLine(ptr, 7, 0, 0, 2, 1, 12392, "/dev/log"),
        NetUnixLine(ptr, 3, 0, 0, 1, 3, 4787297, "/var/run/postgresql/.s.PGSQL.5432"),
        NetUnixLine(ptr, 3, 0, 0, 1, 3, 5091797, ""),
    ]
    assert str(rows[0].flags) == "listen"
    assert str(rows[3].flags) == "default"
    assert str(rows[0].type) == "stream"
    assert str(rows[1].type) == "seqpacket"


def test_psi_fake(fs):
    with pytest.raises(OSError, match="psi_stats: unavailable for fake"):
        fs.psi_stats_for_resource("fake")


def test_psi_cpu(fs):
    stats = fs.psi_stats_for_resource("cpu")
    assert stats.full is None
    assert (stats.some.avg10, stats.some.avg60, stats.some.avg300, stats.some.total) == (0.1, 2.0, 3.85, 15)


@pytest.mark.parametrize("resource", ["memory", "io"])
def test_psi_some_and_full(fs, resource):
    stats = fs.psi_stats_for_resource(resource)
    assert (stats.some.avg10, stats.some.avg60, stats.some.avg300, stats.some.total) == (0.1, 2.0, 3.85, 15)
    assert (stats.full.avg10, stats.full.avg60, stats.full.avg300, stats.full.total) == (0.2, 3.0, 4.95, 25)


def test_schedstat(fs):
    stats = fs.schedstat()
    assert len(stats.cpus) == 2
    cpu0 = next(cpu for cpu in stats.cpus if cpu.cpu_num == "0")
    assert cpu0.running_nanoseconds == 2045936778163039
    assert cpu0.waiting_nanoseconds == 98765432100
    assert cpu0.run_timeslices == 4767485306