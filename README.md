# puredns

Building blocks for resolving large lists of subdomains with the massdns
program and for filtering DNS wildcards out of the results.

## Installation

```
pip install puredns
```

The `massdns` binary is not included. Install it separately if you use
`puredns.massdns`, and pass its path to `Resolver`.

## What is inside

### `puredns.massdns`

- `resolver.Resolver(bin_path="massdns", runner=None)` runs massdns on the
  domains read from a stream. `resolve(reader, output, resolvers_file, qps)`
  hands the domains to massdns through a `LineReader` limited to `qps` lines
  per second (0 means no limit) and blocks until massdns ends. `current()`
  returns how many domains have been handed over so far.
- `resolver.DefaultRunner(bin_path)` starts massdns with the arguments from
  `resolver.create_massdns_args(output, resolvers_file, qps)`
  (`-q -r <resolvers> -o Snl -t A --root --retry REFUSED --retry SERVFAIL
  -w <output>`, plus `-s <qps>` when `qps > 0`). It raises
  `subprocess.CalledProcessError` when massdns exits with a non-zero status.
- `linereader.LineReader(reader, rate)` reads bytes while keeping to `rate`
  lines per second. `read(size)` returns `b""` at the end of the input and
  `None` while the rate limit allows nothing yet; `count()` gives the lines
  read.
- `stdouthandler.StdoutHandler(callback)` is a writable stream that passes
  every complete line, empty ones included, to `callback.callback(line)`.
- `callback.DefaultWriteCallback(massdns_filename, domain_filename)` parses
  massdns `Snl` output. It writes each valid domain to the domain file and
  its A, AAAA and CNAME records to the massdns file; an empty file name
  turns that file off. `found` counts the valid domains.
- `records.JSONResponse.from_dict(data)` builds a response, with its
  `JSONResponseData` and `JSONRecord` entries, from a decoded massdns JSON
  object.

### `puredns.wildcarder`

- `wildcarder.Wildcarder(thread_count, test_count, resolver=None, precache=None)`
  filters wildcard subdomains. `filter(reader)` reads one domain per line
  and returns `(domains, roots)`: the domains that are not wildcards and
  the wildcard roots found. Blank lines and domains longer than 237
  characters are left out. Calling `filter` again while one is running
  raises `RuntimeError`. `query_count()` gives the DNS queries made,
  `current()` the domains processed, and `set_precache(cache)` replaces the
  precache.
- Without a `resolver`, a `clientdns.ClientDNS` querying 8.8.8.8 and 8.8.4.4
  (3 retries, 100 queries per second, 10 at a time) is used. `ClientDNS`
  resolves A records with dnspython.
- `dnscache.DNSCache` maps questions to the answers seen for them. Passed
  as `precache`, its answers are used to avoid queries and are checked
  against the trusted resolver when needed.
- `answercache.AnswerCache`, `detection.DetectionTask`,
  `answers.DNSAnswer`, `answers.RRType` and `randomsub.random_subdomains`
  are the pieces the filter is made of.

### Utilities

- `puredns.progressbar.ProgressBar(update, total, template=..., writer=None, interval=0.2, style=None)`
  redraws a bar on a background thread, calling `update(bar)` before each
  redraw. The template variables are `eta`, `bar`, `current`, `total`,
  `rate`, `percent` and `time`; `set(key, value)` adds your own. It can be
  used as a context manager, which starts and stops it.
- `puredns.movingrate.MovingRate(sampling_rate, samples)` computes a rate as
  a moving average, raising `NotStartedError`, `AlreadyStartedError`,
  `StoppedError` or `AlreadyStoppedError` (all `RateError`) on misuse.
- `puredns.threadpool.ThreadPool(threads, queue_size)` runs callables or
  objects with a `run()` method on worker threads.
- `puredns.procreader.ProcReader(callback)` is a readable stream whose data
  comes from `callback(size)`, which returns `(data, last)`.
- `puredns.shellexecutor.ShellExecutor().shell(name, *args)` runs a program
  silently and raises `subprocess.CalledProcessError` if it fails.
- `puredns.filetest` holds helpers for tests: the `temp_file`, `temp_dir`
  and `override_stdin` context managers, `read_lines`, `clear_file`,
  `StubReader` and `StubWriter`.

## Example: filtering wildcards

```python
import io

from puredns.wildcarder.wildcarder import Wildcarder

wc = Wildcarder(thread_count=10, test_count=3)
domains, roots = wc.filter(io.StringIO("www.example.com\napi.example.com\n"))

print("valid:", domains)
print("wildcard roots:", roots)
print("queries made:", wc.query_count())
```

## Example: resolving with massdns

```python
import io

from puredns.massdns.resolver import Resolver

resolver = Resolver("/usr/local/bin/massdns")
resolver.resolve(io.BytesIO(b"www.example.com\n"), "out.txt", "resolvers.txt", 100)
print(resolver.current(), "domains sent")
```

## What this package does not do

- It has no command-line program; it is a library to build one with.
- It does not fill a `DNSCache` from massdns output for you, nor check or
  download resolver lists.
- Wildcard detection looks at A records (and the CNAMEs returned with
  them) only, not AAAA records.

## Running the tests

```
pip install puredns[test]
pytest
```