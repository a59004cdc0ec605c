import itertools
from concurrent.futures import ThreadPoolExecutor

import pytest

from reconkit.wildcards import (
    LDH_CHARS,
    DNSAnswer,
    DNSRequest,
    ResolveError,
    WildcardDetector,
    WildcardType,
    compare_answers,
    unlikely_name,
)


def _parent(name):
    return name.split(".", 1)[1]


def _static_resolver(calls, wildcard_parent="example.com", address="192.0.2.1"):
    def resolve(name, qtype):
        calls.append((name, qtype))
        if qtype == "A" and _parent(name) == wildcard_parent:
            return [DNSAnswer(name, "A", address)]
        return []

    return resolve


def test_unlikely_name_is_within_subdomain():
    name = unlikely_name("example.com")
    label, _, rest = name.partition(".")
    assert rest == "example.com"
    assert len(label) <= 24
    assert set(label) <= set(LDH_CHARS)
    assert not label.startswith("-") and not label.endswith("-")


def test_unlikely_name_empty_for_overlong_subdomain():
    assert unlikely_name("a" * 300) == ""


def test_compare_answers_is_case_insensitive():
    a = [DNSAnswer("x.example.com", "CNAME", "Target.Example.com")]
    b = [DNSAnswer("y.example.com", "CNAME", "target.example.COM")]
    assert compare_answers(a, b) is True


def test_compare_answers_without_overlap():
    a = [DNSAnswer("x.example.com", "A", "192.0.2.1")]
    b = [DNSAnswer("y.example.com", "A", "198.51.100.7")]
    assert compare_answers(a, b) is False
    assert compare_answers([], b) is False


def test_static_wildcard_without_records():
    detector = WildcardDetector(_static_resolver([]), interval=0)
    request = DNSRequest("www.example.com", "example.com")
    assert detector.get_wildcard_type(request) is WildcardType.STATIC
    assert detector.matches_wildcard(request) is True


def test_static_wildcard_with_matching_records():
    detector = WildcardDetector(_static_resolver([]), interval=0)
    records = [DNSAnswer("www.example.com", "A", "192.0.2.1")]
    request = DNSRequest("www.example.com", "example.com", records)
    assert detector.get_wildcard_type(request) is WildcardType.STATIC


def test_static_wildcard_with_other_records_is_not_a_match():
    detector = WildcardDetector(_static_resolver([]), interval=0)
    records = [DNSAnswer("www.example.com", "A", "198.51.100.7")]
    request = DNSRequest("www.example.com", "example.com", records)
    assert detector.get_wildcard_type(request) is WildcardType.NONE
    assert detector.matches_wildcard(request) is False


def test_no_wildcard_queries_each_type_once():
    calls = []
    detector = WildcardDetector(_static_resolver(calls), interval=0)
    request = DNSRequest("www.other.org", "other.org")
    assert detector.get_wildcard_type(request) is WildcardType.NONE
    assert sorted(qtype for _, qtype in calls) == ["A", "AAAA", "CNAME"]


def test_results_are_cached():
    calls = []
    detector = WildcardDetector(_static_resolver(calls), interval=0)
    request = DNSRequest("www.example.com", "example.com")
    detector.get_wildcard_type(request)
    made = len(calls)
    assert detector.get_wildcard_type(DNSRequest("ftp.example.com", "example.com")) is WildcardType.STATIC
    assert len(calls) == made


def test_dynamic_wildcard():
    counter = itertools.count()

    def resolve(name, qtype):
        if qtype == "A":
            return [DNSAnswer(name, "A", f"10.0.0.{next(counter)}")]
        return []

    detector = WildcardDetector(resolve, interval=0)
    request = DNSRequest("www.example.com", "example.com")
    assert detector.get_wildcard_type(request) is WildcardType.DYNAMIC


def test_server_failure_counts_as_dynamic():
    def resolve(name, qtype):
        raise ResolveError("refused", 5)

    detector = WildcardDetector(resolve, interval=0)
    assert detector.get_wildcard_type(DNSRequest("www.example.com", "example.com")) is WildcardType.DYNAMIC


def test_nxdomain_means_no_wildcard():
    def resolve(name, qtype):
        raise ResolveError("no such name", 3)

    detector = WildcardDetector(resolve, interval=0)
    assert detector.get_wildcard_type(DNSRequest("www.example.com", "example.com")) is WildcardType.NONE


def test_overlong_subdomain_counts_as_dynamic():
    calls = []
    domain = ".".join(["a" * 60] * 5)
    detector = WildcardDetector(_static_resolver(calls), interval=0)
    assert detector.get_wildcard_type(DNSRequest("x." + domain, domain)) is WildcardType.DYNAMIC
    assert calls == []


def test_nested_name_checks_parent_subdomain():
    detector = WildcardDetector(_static_resolver([], wildcard_parent="dev.example.com"), interval=0)
    request = DNSRequest("a.b.dev.example.com", "example.com")
    assert detector.get_wildcard_type(request) is WildcardType.NONE
    request = DNSRequest("b.dev.example.com", "example.com")
    assert detector.get_wildcard_type(request) is WildcardType.STATIC


def test_concurrent_requests_agree():
    calls = []
    detector = WildcardDetector(_static_resolver(calls), interval=0)
    requests = [DNSRequest(f"host{n}.example.com", "example.com") for n in range(8)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(detector.get_wildcard_type, requests))
    assert outcomes == [WildcardType.STATIC] * 8
    made = len(calls)
    assert detector.get_wildcard_type(DNSRequest("www.example.com", "example.com")) is WildcardType.STATIC
    assert len(calls) == made


def test_detector_requires_a_test():
    with pytest.raises(ValueError):
        WildcardDetector(_static_resolver([]), tests=0)