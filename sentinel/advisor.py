import logging
from dataclasses import dataclass
from typing import Optional

import requests

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{}:generateContent"
DEFAULT_MODEL = "gemini-3-flash-preview"
ADVICE_TIMEOUT = 30
TEMPERATURE = 0.7

EMPTY_ADVICE = "Unable to generate security advice at this time."
FALLBACK_ADVICE = "The security expert is currently offline. Please try again later."

PROMPT_TEMPLATE = """
Act as a professional cybersecurity consultant.
Analyze the following password health report and provide a concise, expert summary and 3 actionable tips.

Report Data:
- Strength Score: {score}/4
- Entropy (bits): {entropy:.2f}
- Local Warnings: {warning}
- Automated Suggestions: {suggestions}
- Data Breach Status: {breach}

Format the response in Markdown. Do NOT mention specific passwords. Focus on general security hygiene and why this specific score was achieved.
"""

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdviceRequest:
    score: int
    entropy: float
    warning: str = ""
    suggestions: tuple = ()
    is_compromised: bool = False
    occurrence_count: int = 0

    @classmethod
    def from_record(cls, record) -> "AdviceRequest":
        return cls(
            score=record.score,
            entropy=record.entropy,
            warning=record.warning,
            suggestions=tuple(record.suggestions),
            is_compromised=record.is_compromised,
            occurrence_count=record.occurrence_count,
        )


def build_prompt(req: AdviceRequest) -> str:
    if req.is_compromised:
        breach = f"Compromised ({req.occurrence_count} times)"
    else:
        breach = "Not found in known breaches"
    return PROMPT_TEMPLATE.format(
        score=req.score,
        entropy=req.entropy,
        warning=req.warning or "None",
        suggestions=", ".join(req.suggestions) or "None",
        breach=breach,
    )


def _extract_text(payload: dict) -> str:
    parts = payload["candidates"][0]["content"]["parts"]
    return "".join(part.get("text", "") for part in parts)


def get_security_advice(
    req: AdviceRequest,
    api_key: Optional[str],
    model: str = DEFAULT_MODEL,
    timeout: float = ADVICE_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Asks the text-generation service for a Markdown summary of the report.
    Never raises: any failure (no key, network, bad status, odd payload)
    gives back FALLBACK_ADVICE so the rest of the results still render.
    """
    if not api_key:
        logger.warning("No API key configured; security advice unavailable")
        return FALLBACK_ADVICE

    body = {
        "contents": [{"parts": [{"text": build_prompt(req)}]}],
        "generationConfig": {"temperature": TEMPERATURE},
    }
    http = session or requests
    try:
        resp = http.post(
            GEMINI_URL.format(model),
            json=body,
            headers={"x-goog-api-key": api_key},
            timeout=timeout,
        )
        resp.raise_for_status()
        text = _extract_text(resp.json())
    except requests.RequestException as e:
        logger.warning("Advice request failed: %s", e)
        return FALLBACK_ADVICE
    except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
        logger.warning("Unexpected advice response: %s", e)
        return FALLBACK_ADVICE

    return text.strip() or EMPTY_ADVICE
