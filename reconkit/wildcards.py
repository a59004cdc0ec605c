"""DNS wildcard detection for subdomain names."""

from __future__ import annotations

import enum
import random
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from itertools import pairwise

NUM_WILDCARD_TESTS = 5

MAX_DNS_NAME_LEN = 253
MAX_DNS_LABEL_LEN = 63
MIN_LABEL_LEN = 6
MAX_LABEL_LEN = 24
LDH_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789-"

RCODE_SERVER_FAILURE = 2
RCODE_NOT_IMPLEMENTED = 4
RCODE_REFUSED = 5
RCODE_NO_RESPONSE = 100

_FATAL_RCODES = frozenset(
    {RCODE_NO_RESPONSE, RCODE_REFUSED, RCODE_SERVER_FAILURE, RCODE_NOT_IMPLEMENTED}
)
_WILDCARD_QUERY_TYPES = ("CNAME", "A", "AAAA")


class WildcardType(enum.IntEnum):
    """Kinds of DNS wildcard."""

    NONE = 0
    STATIC = 1
    DYNAMIC = 2


@dataclass(frozen=True)
class DNSAnswer:
    """One resource record returned by a DNS query."""

    name: str
    type: str
    data: str
    ttl: int = 0


@dataclass
class DNSRequest:
    """A resolved name within a root domain, with the records it returned."""

    name: str
    domain: str
    records: list[DNSAnswer] = field(default_factory=list)


class ResolveError(Exception):
    """A DNS query failed; rcode holds the response code."""

    def __init__(self, message: str, rcode: int) -> None:
        super().__init__(message)
        self.rcode = rcode


Resolver = Callable[[str, str], Sequence[DNSAnswer]]


class _WildcardTestError(Exception):
    pass


@dataclass
class _Wildcard:
    type: WildcardType = WildcardType.NONE
    answers: list[DNSAnswer] | None = None
    ready: threading.Event = field(default_factory=threading.Event)


def compare_answers(ans1: Sequence[DNSAnswer], ans2: Sequence[DNSAnswer]) -> bool:
    """True when any record of one set carries the same data as one of the other."""
    folded = {a.data.casefold() for a in ans2}
    return any(a.data.casefold() in folded for a in ans1)


def unlikely_name(sub: str) -> str:
    """Return a random, improbable name within sub, or "" when sub is too long."""
    length = MAX_DNS_NAME_LEN - (len(sub) + 1)
    if length > MAX_LABEL_LEN:
        length = MAX_LABEL_LEN
    elif length < MIN_LABEL_LEN:
        return ""

    ldh = list(LDH_CHARS)
    random.shuffle(ldh)
    length = random.randint(MIN_LABEL_LEN, length)
    label = "".join(random.choices(ldh, k=length))
    if not label:
        return label
    return label.strip("-") + "." + sub


class WildcardDetector:
    """Detects and caches DNS wildcards using the given resolver.

    The resolver is called as resolve(name, qtype) and returns the answers,
    raising ResolveError when the query fails.
    """

    def __init__(
        self,
        resolve: Resolver,
        *,
        interval: float = 1.0,
        tests: int = NUM_WILDCARD_TESTS,
    ) -> None:
        if tests < 1:
            raise ValueError("at least one wildcard test is required")
        self._resolve = resolve
        self._interval = interval
        self._tests = tests
        self._lock = threading.Lock()
        self._cache: dict[str, _Wildcard] = {}

    def matches_wildcard(self, request: DNSRequest) -> bool:
        """True if the request resolved to a DNS wildcard."""
        return self.get_wildcard_type(request) is not WildcardType.NONE

    def get_wildcard_type(self, request: DNSRequest) -> WildcardType:
        """Return the wildcard type that applies to the request's name."""
        base = len(request.domain.split("."))
        labels = request.name.lower().split(".")
        if len(labels) > base:
            labels = labels[1:]

        for start in range(len(labels) - base, -1, -1):
            entry = self._get_wildcard(".".join(labels[start:]))
            if entry.type is WildcardType.DYNAMIC:
                return WildcardType.DYNAMIC
            if entry.type is WildcardType.STATIC and (
                not request.records or compare_answers(request.records, entry.answers or [])
            ):
                return WildcardType.STATIC
        return self._check_ips_across_levels(request)

    def _check_ips_across_levels(self, request: DNSRequest) -> WildcardType:
        if not request.records:
            return WildcardType.NONE

        base = len(request.domain.split("."))
        labels = request.name.lower().split(".")
        if len(labels) <= base or len(labels) - base < 3:
            return WildcardType.NONE

        for depth in (1, 2, 3):
            entry = self._get_wildcard(".".join(labels[depth:]))
            if entry.answers is None or not compare_answers(request.records, entry.answers):
                return WildcardType.NONE
        return WildcardType.STATIC

    def _get_wildcard(self, sub: str) -> _Wildcard:
        with self._lock:
            entry = self._cache.get(sub)
            fresh = entry is None
            if entry is None:
                entry = _Wildcard()
                self._cache[sub] = entry
        if not fresh:
            entry.ready.wait()
            return entry
        try:
            self._test_subdomain(sub, entry)
        finally:
            entry.ready.set()
        return entry

    def _test_subdomain(self, sub: str, entry: _Wildcard) -> None:
        answer_sets: list[list[DNSAnswer]] = []
        for _ in range(self._tests):
            try:
                answers = self._wildcard_test(sub)
            except _WildcardTestError:
                # A failed test is treated as the most severe wildcard type
                entry.type = WildcardType.DYNAMIC
                return
            if not answers:
                return
            answer_sets.append(answers)
            time.sleep(self._interval)

        if all(compare_answers(a, b) for a, b in pairwise(answer_sets)):
            entry.type = WildcardType.STATIC
            entry.answers = answer_sets[0]
        else:
            entry.type = WildcardType.DYNAMIC

    def _wildcard_test(self, sub: str) -> list[DNSAnswer]:
        name = unlikely_name(sub)
        if not name:
            raise _WildcardTestError("failed to generate an unlikely name for wildcard testing")

        answers: list[DNSAnswer] = []
        for qtype in _WILDCARD_QUERY_TYPES:
            try:
                answers.extend(self._resolve(name, qtype) or [])
            except ResolveError as err:
                if err.rcode in _FATAL_RCODES:
                    raise _WildcardTestError(
                        "failed to get a DNS server response during wildcard testing"
                    ) from err
        return answers