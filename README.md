# reconkit

Building blocks for discovering and mapping the subdomains of a domain.
The package covers name matching, IP address arithmetic, parsing of
list-valued command-line options, small concurrency helpers, DNS wildcard
detection and writers that turn a network graph into files for common
visualisation tools.

## Installation

```
pip install .
pip install ".[test]"   # with pytest and responses for the test suite
```

## Modules

### `reconkit.misc`

- `subdomain_regex(domain)` compiles a pattern that matches subdomain
  names ending in `domain`; `any_subdomain_regex()` matches any DNS
  subdomain name. The underlying patterns are `SUBRE` and `IPV4_RE`.
- `new_unique_elements(orig, *items)` returns the lower-cased items that
  are neither in `orig` (compared case-insensitively) nor repeated among
  themselves; `unique_append(orig, *items)` returns a new list with them
  added to the end of `orig`.
- `remove_asterisk_label(name)` drops everything up to and including the
  last `*` label, returning `""` when only one label would remain.
- `reverse_string(s)` reverses a string.
- `get_word_list(lines)` keeps the stripped, non-empty lines that hold no
  hyphen; `get_tld_list()` downloads the list of top-level domains with
  `request_web_page` and returns an empty list if the request fails.
- `StringFilter().duplicate(s)` returns `False` the first time it sees
  `s` and `True` after that. It is safe to share between threads.

### `reconkit.network`

- `request_web_page(url, body=None, headers=None, uid="", secret="")`
  fetches a page with browser-like `User-Agent`, `Accept` and
  `Accept-Language` headers (`USER_AGENT`, `ACCEPT`, `ACCEPT_LANG`),
  extra headers overriding them. It sends a POST when `body` is given and
  a GET otherwise, uses basic authentication when both `uid` and `secret`
  are set, and returns the response text. Any status outside 2xx raises
  `requests.HTTPError`. Requests share one session with a 30 second
  timeout; TLS certificates are not verified.
- `copy_cookies(src, dest)` copies the session cookies that apply to the
  `src` URL onto the host of `dest`; `check_cookie(url, name)` reports
  whether a cookie of that name would be sent to `url`.
- `net_hosts(cidr)` lists the addresses of a netblock without its
  network and broadcast addresses; `net_first_last(cidr)` returns its
  first and last address.
- `range_hosts(start, end)` lists every address from `start` to `end`
  inclusive, and is empty unless `end` is greater than `start`.
- `cidr_subset(cidr, addr, num)` returns up to `num + 1` addresses of
  the netblock centred on `addr`, clipped to the netblock; an address
  outside the netblock comes back alone.
- `reverse_ip(ip)`, `ipv6_nibble_format(ip)`, `is_ipv4(ip)`,
  `is_ipv6(ip)` and `hex_string(data)`.

Addresses and netblocks may be given as strings or as `ipaddress`
objects; the results are `ipaddress` objects. IPv4-mapped IPv6 addresses
are treated as IPv4.

### `reconkit.parse`

List types that accumulate comma-separated values through `set(text)`
and join them back with commas through `str()`:

- `ParseStrings`: stripped strings.
- `ParseInts`: integers.
- `ParseIPs`: addresses and ranges, either `10.0.0.1-10.0.0.9` or the
  short form `192.168.1.1-254`.
- `ParseCIDRs`: netblocks in CIDR notation.

Empty or malformed input raises `ValueError`.

### `reconkit.queue`

`Queue` is a thread-safe FIFO with `append(item)`, `next()` (raises
`IndexError` when empty), `empty()` and `len()`.

### `reconkit.semaphores`

`Semaphore` is the abstract interface with `acquire(num)`,
`try_acquire(num)` and `release(num)`.

- `SimpleSemaphore(max_count)` is an ordinary counting semaphore;
  `release` blocks while it is already full.
- `TimedSemaphore(max_count, delay)` returns released counts one at a
  time, one every `delay` seconds, from a background thread. Call
  `close()` or use it as a context manager to stop that thread.

### `reconkit.limits`

`get_file_limit()` raises the open-file soft limit to the hard limit
where the platform allows it and returns the usable value, capped at
`DEFAULT_FILE_LIMIT` (10000). Where there are no POSIX resource limits
it returns 10000.

### `reconkit.wildcards`

`WildcardDetector(resolve, interval=1.0, tests=5)` decides whether a
resolved name comes from a DNS wildcard. `resolve(name, qtype)` is
supplied by the caller: it returns a sequence of `DNSAnswer` records and
raises `ResolveError(message, rcode)` on failure.

For each level of a name the detector queries improbable names made by
`unlikely_name(sub)` for CNAME, A and AAAA records, `tests` times with
`interval` seconds between rounds, and caches the outcome per level:

- no answers: no wildcard;
- the same answers every round: `WildcardType.STATIC`;
- differing answers, a failure to build a probe name, or a
  server failure, refusal, not-implemented or no-response error
  (`rcode` 2, 5, 4 or 100): `WildcardType.DYNAMIC`.

`get_wildcard_type(request)` returns the `WildcardType` for a
`DNSRequest(name, domain, records)`; `matches_wildcard(request)` returns
whether it is anything but `WildcardType.NONE`. `compare_answers(a, b)`
is true when any record data is shared, ignoring case.

```python
from reconkit.wildcards import DNSRequest, WildcardDetector

detector = WildcardDetector(my_resolver)
request = DNSRequest("www.example.com", "example.com", answers)
if detector.matches_wildcard(request):
    ...
```

### `reconkit.viz`

`reconkit.viz.graph` defines `Node(id, type, label, title, source)` and
`Edge(from_, to, label, title)`, whose ends are indexes into the node
list. Node types with colours are `subdomain`, `domain`, `address`,
`ptr`, `ns`, `mx`, `netblock` and `as`.

Each writer takes a text stream, the nodes and the edges:

- `reconkit.viz.d3.write_d3_data`: an HTML page with a D3 force layout;
  raises `IndexError` for an edge that names a missing node.
- `reconkit.viz.dot.write_dot_data`: a Graphviz DOT description.
- `reconkit.viz.graphistry.write_graphistry_data`: a Graphistry
  edge-list JSON document.
- `reconkit.viz.gexf.write_gexf_data`: a GEXF 1.3 document for Gephi.
- `reconkit.viz.maltego.write_maltego_data`: a CSV table for Maltego,
  walked from every `as` node; an `as` node's title must hold the
  company name after its second colon, or `ValueError` is raised.
- `reconkit.viz.visjs.write_visjs_data`: an HTML page using vis.js.

## Examples

Finding subdomains of a domain in some text:

```python
from reconkit.misc import subdomain_regex

pattern = subdomain_regex("example.com")
match = pattern.search("see www.example.com and mail.example.com")
print(match.group(0))  # www.example.com
```

Merging name lists without case-insensitive duplicates:

```python
from reconkit.misc import unique_append

names = unique_append(["a.example.com"], "A.example.com", "b.example.com")
# ['a.example.com', 'b.example.com']
```

Reversing an address for a PTR lookup:

```python
from reconkit.network import reverse_ip

print(reverse_ip("192.168.1.55") + ".in-addr.arpa")
# 55.1.168.192.in-addr.arpa
```

Writing a graph for Gephi:

```python
from reconkit.viz.gexf import write_gexf_data
from reconkit.viz.graph import Edge, Node

nodes = [Node(type="domain", label="example.com", title="Domain: example.com"),
         Node(type="subdomain", label="www.example.com", title="Subdomain: www.example.com")]
edges = [Edge(from_=1, to=0, title="root")]

with open("graph.gexf", "w", encoding="utf-8") as out:
    write_gexf_data(out, nodes, edges)
```

## What the package does not do

reconkit is a library only. It has no command-line program, performs no
subdomain enumeration of its own, carries no DNS resolver (the wildcard
detector uses the one you pass in) and keeps no database of results:
graphs for the writers have to be built by the caller.