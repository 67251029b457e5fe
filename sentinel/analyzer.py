from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import requests

from sentinel.analysis_record import AnalysisRecord
from sentinel.breach_check import HIBP_RANGE_URL, REQUEST_TIMEOUT, check_breach
from sentinel.strength import estimate_strength


def analyze_password(
    password: str,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
    range_url: str = HIBP_RANGE_URL,
) -> AnalysisRecord:
    """
    Runs the strength estimate and the breach lookup for one password and
    returns the combined record. The breach lookup runs on a worker thread
    while the estimate is computed.

    The password is not kept anywhere once this returns; history gets the
    redacted label only.
    """
    with ThreadPoolExecutor(max_workers=1) as pool:
        breach_future = pool.submit(
            check_breach, password, session=session, timeout=timeout, range_url=range_url
        )
        stats = estimate_strength(password)
        breach = breach_future.result()

    return AnalysisRecord.create(password, stats, breach)
