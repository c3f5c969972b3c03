from dataclasses import astuple

import pytest

from procfs.nfs.stats import (
    ClientRPC,
    ClientRPCStats,
    FileHandles,
    InputOutput,
    Network,
    ReplyCache,
    ServerRPC,
    ServerRPCStats,
    ServerV4Stats,
    Threads,
    V2Stats,
    parse_client_rpc,
    parse_client_v4_stats,
    parse_file_handles,
    parse_input_output,
    parse_network,
    parse_read_ahead_cache,
    parse_reply_cache,
    parse_server_rpc,
    parse_server_v4_stats,
    parse_threads,
    parse_v2_stats,
    parse_v3_stats,
    parse_v4_ops,
)


def _ints(text):
    return [int(part) for part in text.split()]


V2_LINE = _ints("18 2 69 0 0 4410 0 0 0 0 0 0 0 0 0 0 0 99 2")
V3_LINE = _ints("22 1 4084749 29200 94754 32580 186 47747 7981 8639 0 6356 0 6962 0 7958 0 0 241 4 4 2 39")
OLD_PROC4 = _ints(
    "48 98 51 54 83 85 23 24 1 28 73 68 83 12 84 39 68 59 58 88 29 74 69 96 21 "
    "84 15 53 86 54 66 56 97 36 49 32 85 81 11 58 32 67 13 28 35 90 1 26 1337"
)
NEW_PROC4 = _ints(
    "61 1 0 0 0 0 0 0 0 0 0 0 0 1 1 0 0 0 0 0 0 0 2 0 0 0 0 0 0 0 0 0 0 0 0 0 0 "
    "0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0"
)
PROC4OPS = _ints(
    "72 0 0 0 1098 2 0 0 0 0 8179 5896 0 0 0 0 5900 0 0 2 0 2 0 9609 0 2 150 1272 "
    "0 0 0 1236 0 0 0 0 3 3 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0 "
    "0 0 0 0 0 0 0 0 0"
)


def test_simple_lines():
    assert parse_reply_cache([0, 6, 18622]) == ReplyCache(0, 6, 18622)
    assert parse_file_handles([0, 0, 0, 0, 0]) == FileHandles()
    assert parse_input_output([157286400, 0]) == InputOutput(read=157286400, write=0)
    assert parse_threads([8, 0]) == Threads(threads=8, full_cnt=0)
    assert parse_network([18628, 0, 18628, 6]) == Network(18628, 0, 18628, 6)
    assert parse_server_rpc([18628, 0, 0, 0, 0]) == ServerRPC(rpc_count=18628)
    assert parse_client_rpc([4329785, 0, 4338291]) == ClientRPC(4329785, 0, 4338291)


@pytest.mark.parametrize(
    "parser, values",
    [
        (parse_reply_cache, [0, 6]),
        (parse_file_handles, [0, 0, 0, 0]),
        (parse_input_output, [1, 2, 3]),
        (parse_threads, [8]),
        (parse_network, [1, 2, 3]),
        (parse_server_rpc, [1, 2, 3]),
        (parse_client_rpc, [1, 2, 3, 4]),
        (parse_read_ahead_cache, [32, 0, 0]),
    ],
)
def test_wrong_length_raises(parser, values):
    with pytest.raises(ValueError, match="invalid"):
        parser(values)


def test_read_ahead_cache():
    values = _ints("32 0 0 0 0 0 0 0 0 0 0 0")
    cache = parse_read_ahead_cache(values)
    assert cache.cache_size == 32
    assert cache.cache_histogram == values[1:11]
    assert cache.not_found == 0


def test_v2_stats():
    stats = parse_v2_stats(V2_LINE)
    assert stats.null == 2
    assert stats.get_attr == 69
    assert stats.lookup == 4410
    assert stats.read_dir == 99
    assert astuple(stats) == tuple(V2_LINE[1:19])


def test_v3_stats():
    stats = parse_v3_stats(V3_LINE)
    assert stats.get_attr == 4084749
    assert stats.read_dir_plus == 241
    assert stats.commit == 39
    assert astuple(stats) == tuple(V3_LINE[1:23])


def test_client_v4_stats_old_kernel_is_padded():
    stats = parse_client_v4_stats(OLD_PROC4)
    assert stats.null == 98
    assert stats.layout_return == 1337
    assert stats.secinfo_no_name == 0
    assert stats.clone == 0
    values = astuple(stats)
    assert values[:48] == tuple(OLD_PROC4[1:])
    assert all(value == 0 for value in values[48:])


def test_client_v4_stats_full_line():
    stats = parse_client_v4_stats(NEW_PROC4)
    assert stats.null == 1
    assert stats.set_client_id == 1
    assert stats.set_client_id_confirm == 1
    assert stats.remove == 2
    assert astuple(stats) == tuple(NEW_PROC4[1:60])


def test_server_v4_stats():
    assert parse_server_v4_stats([2, 2, 10853]) == ServerV4Stats(null=2, compound=10853)


def test_aggregate_defaults_are_independent():
    first = ServerRPCStats()
    second = ServerRPCStats()
    first.read_ahead_cache.cache_histogram.append(1)
    assert second.read_ahead_cache.cache_histogram == []
    assert ClientRPCStats().v2_stats == V2Stats()