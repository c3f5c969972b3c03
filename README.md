# procfs

Read and parse the Linux `/proc` pseudo-filesystem from Python. The
readers return plain dataclasses. Malformed input raises `ValueError`
(or a subclass of it), and a missing file raises the usual `OSError`.
The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

## System-wide statistics

`procfs.fs.FS` stands for a mounted proc filesystem. It defaults to
`/proc`, but any directory laid out the same way works, which is handy
for captured fixtures.

```python
from procfs.fs import FS, default_fs

fs = default_fs()               # mounted at /proc
# fs = FS("/some/other/proc")   # or any directory laid out like /proc

stat = fs.stat()                # /proc/stat
print(stat.boot_time, stat.cpu_total.user, len(stat.cpu), stat.softirq.rcu)

net_dev = fs.net_dev()          # /proc/net/dev, a dict keyed by interface
for name, line in net_dev.items():
    print(name, line.rx_bytes, line.tx_bytes)
print(net_dev.total().name)     # sorted, comma separated interface names

for entry in fs.gather_softnet_stats():   # /proc/net/softnet_stat
    print(entry.processed, entry.dropped, entry.time_squeezed)

for row in fs.net_unix().rows:  # /proc/net/unix
    print(row.path, row.inode, str(row.type), str(row.state), str(row.flags))

psi = fs.psi_stats_for_resource("memory")  # /proc/pressure/memory
if psi.some is not None:
    print(psi.some.avg10, psi.some.total)

for cpu in fs.schedstat().cpus:  # /proc/schedstat
    print(cpu.cpu_num, cpu.running_nanoseconds, cpu.run_timeslices)
```

CPU times in `Stat` are in seconds (the kernel's clock ticks divided by
100). `psi_stats_for_resource` raises `OSError` when the resource has no
pressure file. When a row of the unix socket table cannot be parsed,
`procfs.net_unix.NetUnixParseError` (a `ValueError`) is raised; its
`partial` attribute holds the rows read before it.

## Processes

`procfs.proc.Proc` is a process under a mount point. Get one from an
`FS`, or build one directly with `Proc(pid, root)`.

```python
fs = default_fs()
me = fs.self_process()          # follows the "self" link
other = fs.proc(1)              # raises OSError if the pid does not exist

print(me.pid, me.comm(), me.cmdline(), me.environ())
print(me.executable(), me.cwd(), me.root_dir())  # "" when the link is missing

st = me.stat()                  # /proc/[pid]/stat
print(st.comm, st.state, st.cpu_time(), st.virtual_memory(),
      st.resident_memory(), st.start_time())

status = me.new_status()        # /proc/[pid]/status, kB values as bytes
print(status.name, status.vm_rss, status.total_ctxt_switches())

print(me.limits().open_files)   # -1 means unlimited
print(me.io().read_bytes, me.schedstat().running_nanoseconds)
print(me.namespaces())          # {"net": Namespace(type="net", inode=...), ...}
print(me.net_dev())

print(me.file_descriptors(), me.file_descriptors_len(),
      me.file_descriptor_targets())
infos = me.file_descriptors_info()
print(infos.inotify_watch_len(), me.fd_info("0").flags)

for proc in sorted(fs.all_procs()):   # Proc objects order by pid
    print(proc.pid)
```

## NFS RPC counters

```python
from procfs.nfs.reader import NfsFS, new_default_fs, parse_server_rpc_stats

nfs = new_default_fs()               # or NfsFS("/some/other/proc")
client = nfs.client_rpc_stats()      # /proc/net/rpc/nfs
print(client.network.tcp_count, client.v3_stats.get_attr)

with open("/proc/net/rpc/nfsd") as stream:
    server = parse_server_rpc_stats(stream)
print(server.reply_cache.hits, server.threads.threads, server.v4_ops.put_fh)
```

`parse_client_rpc_stats` and `parse_server_rpc_stats` take an open text
file, any iterable of lines, or a whole string. Unknown line labels are
an error. The per-line parsers and records live in `procfs.nfs.stats`.

## Parsing text directly

Each module also exposes its parser, so captured text can be read
without a live `/proc`:

- `procfs.stat.parse_stat(text)`, `parse_cpu_stat(line)`, `parse_softirq_stat(line)`
- `procfs.net_dev.parse_net_dev(text)`, `parse_net_dev_line(raw_line)`
- `procfs.net_softnet.parse_softnet_entries(data)`
- `procfs.net_unix.parse_net_unix(lines)`
- `procfs.proc_psi.parse_psi_stats(resource, text)`
- `procfs.schedstat.parse_schedstat(text)`, `parse_proc_schedstat(contents)`
- `procfs.proc_stat.parse_proc_stat(pid, data, proc_root)`
- `procfs.proc_status.parse_proc_status(pid, text)`
- `procfs.proc_io.parse_proc_io(text)`
- `procfs.proc_limits.parse_limits(lines)`, `parse_limit_value(s)`
- `procfs.proc_ns.parse_namespace_link(target)`
- `procfs.proc_fdinfo.parse_fdinfo(fd, text)`, `parse_inotify_info(line)`

## What it does not do

This is a library only. It has no command-line program and does not
export metrics anywhere. It does not read mount information
(`mountinfo`, `mountstats`) or `/proc` files other than those listed
above.

## Running the tests

```
pip install .[test]
pytest
```