import hashlib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import requests

HIBP_RANGE_URL = "https://api.pwnedpasswords.com/range/{}"
REQUEST_TIMEOUT = 8
HEADERS = {
    "User-Agent": "Sentinel-PasswordCheck/1.0",
    "Add-Padding": "true",
}
PREFIX_LENGTH = 5

logger = logging.getLogger(__name__)


class LookupStatus(Enum):
    OK = "ok"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"
    INPUT_ERROR = "input_error"


@dataclass(frozen=True)
class BreachLookup:
    """
    Tagged result of one range query. Anything other than OK carries count 0.
    """
    status: LookupStatus
    count: int = 0

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.OK


def sha1_hex(password: str) -> str:
    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()


def split_digest(digest: str) -> Tuple[str, str]:
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def find_suffix_count(body: str, suffix: str) -> int:
    """
    Scans a range response ("SUFFIX:COUNT" per line) for an exact suffix match.
    Returns 0 when the suffix is not listed. Raises ValueError when the
    matching line carries a count that is not a plain non-negative integer.
    """
    for line in body.split("\n"):
        sfx, sep, cnt = line.partition(":")
        if not sep:
            continue
        if sfx == suffix:
            cnt = cnt.strip()
            if not cnt.isdigit():
                raise ValueError(f"bad count {cnt!r}")
            return int(cnt)
    return 0


def lookup_range(
    password: str,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
    range_url: str = HIBP_RANGE_URL,
) -> BreachLookup:
    """
    Checks whether the password appears in public breaches (k-anonymity).
    Only the first 5 characters of the SHA-1 digest are sent; the suffix
    is matched locally against the returned candidate list.
    """
    if not password:
        return BreachLookup(LookupStatus.OK, 0)

    try:
        prefix, suffix = split_digest(sha1_hex(password))
    except UnicodeEncodeError:
        logger.warning("Password could not be encoded as UTF-8; skipping breach check")
        return BreachLookup(LookupStatus.INPUT_ERROR)

    http = session or requests
    logger.debug("Querying breach range %s", prefix)
    try:
        resp = http.get(range_url.format(prefix), headers=HEADERS, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Breach range query failed: %s", e)
        return BreachLookup(LookupStatus.NETWORK_ERROR)

    if not 200 <= resp.status_code < 300:
        logger.warning("Breach range query returned HTTP %s", resp.status_code)
        return BreachLookup(LookupStatus.HTTP_ERROR)

    try:
        count = find_suffix_count(resp.text, suffix)
    except (ValueError, TypeError) as e:
        logger.warning("Malformed breach range response: %s", e)
        return BreachLookup(LookupStatus.PARSE_ERROR)

    return BreachLookup(LookupStatus.OK, count)


def pwned_count(password: str, **kwargs) -> int:
    """
    How many times the password appeared in breaches (0 = not found).
    Failures are reported as 0 as well, so a breach check never blocks the
    rest of the analysis.
    """
    try:
        return lookup_range(password, **kwargs).count
    except Exception as e:
        logger.warning("Breach check failed unexpectedly: %s", e)
        return 0


@dataclass(frozen=True)
class BreachResult:
    occurrence_count: int = 0

    @property
    def is_compromised(self) -> bool:
        return self.occurrence_count > 0


def check_breach(password: str, **kwargs) -> BreachResult:
    return BreachResult(pwned_count(password, **kwargs))
