"""Name filtering, subdomain patterns and list helpers."""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable

import requests

from .network import request_web_page

IPV4_RE = (
    r"((25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)[.]){3}"
    r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
)
SUBRE = r"(([a-zA-Z0-9]{1}|[_a-zA-Z0-9]{1}[_a-zA-Z0-9-]{0,61}[a-zA-Z0-9]{1})[.]{1})+"

TLD_LIST_URL = "https://raw.githubusercontent.com/OWASP/Amass/develop/wordlists/tldlist.txt"


def get_word_list(lines: Iterable[str]) -> list[str]:
    """Return the stripped, non-empty lines that contain no hyphen."""
    words = []
    for line in lines:
        word = line.strip()
        if word and "-" not in word:
            words.append(word)
    return words


def get_tld_list() -> list[str]:
    """Download the list of known top-level domains; empty on failure."""
    try:
        page = request_web_page(TLD_LIST_URL)
    except requests.RequestException:
        return []
    return get_word_list(page.splitlines())


class StringFilter:
    """Lets each distinct string through once."""

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._lock = threading.Lock()

    def duplicate(self, s: str) -> bool:
        """Return True if s was seen before, otherwise remember it and return False."""
        with self._lock:
            if s in self._seen:
                return True
            self._seen.add(s)
            return False


def subdomain_regex(domain: str) -> re.Pattern[str]:
    """Compile a pattern matching subdomain names ending in the domain."""
    return re.compile(SUBRE + domain.replace(".", "[.]"))


def any_subdomain_regex() -> re.Pattern[str]:
    """Compile a pattern matching any DNS subdomain name."""
    return re.compile(SUBRE + "[a-zA-Z]{0,61}")


def new_unique_elements(orig: Iterable[str], *args: str) -> list[str]:
    """Return the lower-cased new items that are neither in orig nor repeated."""
    existing = {item.lower() for item in orig}
    result: list[str] = []
    for item in args:
        lowered = item.lower()
        if lowered not in existing and lowered not in result:
            result.append(lowered)
    return result


def unique_append(orig: list[str], *args: str) -> list[str]:
    """Return orig extended with the items not already present."""
    return list(orig) + new_unique_elements(orig, *args)


def remove_asterisk_label(s: str) -> str:
    """Return the name with everything up to its last asterisk label removed."""
    labels = s.split(".")
    stars = [pos for pos, label in enumerate(labels) if label.strip() == "*"]
    index = stars[-1] + 1 if stars else 0
    if index == len(labels):
        index = 0
    if index == len(labels) - 1:
        return ""
    return ".".join(labels[index:])


def reverse_string(s: str) -> str:
    """Return the characters of s in reverse order."""
    return s[::-1]