import base64
import ipaddress

import pytest
import requests
import responses

from reconkit import network

TEST_ADDR = "192.168.1.55"
TEST_CIDR = "192.168.1.0/24"


def test_range_hosts():
    ips = network.range_hosts("72.237.4.1", "72.237.4.50")
    assert len(ips) == 50
    assert str(ips[0]) == "72.237.4.1"
    assert str(ips[-1]) == "72.237.4.50"


def test_range_hosts_rejects_reverse_and_equal():
    assert network.range_hosts("10.0.0.5", "10.0.0.1") == []
    assert network.range_hosts("10.0.0.5", "10.0.0.5") == []
    assert network.range_hosts(None, "10.0.0.5") == []


def test_net_hosts():
    ips = network.net_hosts("72.237.4.0/24")
    assert len(ips) == 254
    assert str(ips[0]) == "72.237.4.1"
    assert str(ips[-1]) == "72.237.4.254"


def test_cidr_subset():
    size = 50
    offset = size // 2
    subset = network.cidr_subset(TEST_CIDR, TEST_ADDR, size)
    assert len(subset) == size + 1
    assert str(subset[0]) == f"192.168.1.{55 - offset}"
    assert str(subset[-1]) == f"192.168.1.{55 + offset}"

    subset = network.cidr_subset(ipaddress.ip_network(TEST_CIDR), "192.168.1.250", size)
    assert len(subset) == offset + 6


def test_cidr_subset_outside_network():
    assert network.cidr_subset(TEST_CIDR, "10.0.0.1", 10) == [ipaddress.ip_address("10.0.0.1")]


def test_net_first_last():
    first, last = network.net_first_last("192.168.1.0/24")
    assert (str(first), str(last)) == ("192.168.1.0", "192.168.1.255")
    first, last = network.net_first_last("10.1.2.3/32")
    assert first == last


def test_ip_versions():
    assert network.is_ipv4("192.168.1.1")
    assert not network.is_ipv6("192.168.1.1")
    assert network.is_ipv6("2001:db8::1")
    assert network.is_ipv4("::ffff:192.168.1.1")


def test_reverse_ip_and_nibbles():
    assert network.reverse_ip("1.2.3.4") == "4.3.2.1"
    assert network.ipv6_nibble_format("abcd") == "d.c.b.a"
    assert network.hex_string(b"\x01\xab\xff") == "01abff"


def test_request_web_page_get():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "https://example.com/page", body="hello", status=200)
        assert network.request_web_page("https://example.com/page") == "hello"
        sent = rsps.calls[0].request
    assert sent.method == "GET"
    assert sent.headers["User-Agent"] == network.USER_AGENT
    assert sent.headers["Accept-Language"] == network.ACCEPT_LANG


def test_request_web_page_post_with_headers_and_auth():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/api", body="ok", status=201)
        result = network.request_web_page(
            "https://example.com/api", body="data", headers={"X-Test": "1"}, uid="user", secret="secret"
        )
        sent = rsps.calls[0].request
    assert result == "ok"
    assert sent.method == "POST"
    assert sent.headers["X-Test"] == "1"
    scheme, encoded = sent.headers["Authorization"].split()
    assert scheme == "Basic"
    assert base64.b64decode(encoded) == b"user:secret"


def test_request_web_page_error_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "https://example.com/missing", status=404)
        with pytest.raises(requests.HTTPError):
            network.request_web_page("https://example.com/missing")


@pytest.fixture
def clean_jar():
    network._session.cookies.clear()
    yield
    network._session.cookies.clear()


def test_check_and_copy_cookies(clean_jar):
    network._session.cookies.set("session", "token", domain="a.example.com", path="/")
    assert network.check_cookie("https://a.example.com/", "session")
    assert not network.check_cookie("https://b.example.com/", "session")
    network.copy_cookies("https://a.example.com/", "https://b.example.com/")
    assert network.check_cookie("https://b.example.com/x", "session")
    assert not network.check_cookie("https://b.example.com/", "other")