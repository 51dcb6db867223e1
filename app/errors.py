# app/errors.py
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
import openai

# Messages returned to the browser. Never include exception text here.
CHILD_REQUIRED_MESSAGE = "At least one child is required."
INVALID_PAYLOAD_MESSAGE = "Invalid request payload."
GENERATION_FAILED_MESSAGE = "Invalid request payload or AI generation error."


class ValidationError(ValueError):
    """No child record carries any data. Caller can fix the input and resubmit."""

    def __init__(self, message: str = CHILD_REQUIRED_MESSAGE):
        super().__init__(message)
        self.message = message


class UnexpectedError(RuntimeError):
    """Malformed body or a failed generation call; detail stays in the logs."""

    def __init__(self, notice: "ErrorNotice", public_message: str = INVALID_PAYLOAD_MESSAGE):
        super().__init__(notice.debug or notice.title)
        self.notice = notice
        self.public_message = public_message


@dataclass
class ErrorNotice:
    code: str                  # short machine code, e.g. "NETWORK_DNS", "OPENAI_RATE"
    title: str                 # short, user-facing title
    user_message: str          # safe message you can show to users (what to try next)
    hint: Optional[str] = None # optional extra hint
    support_id: str = ""       # unique ID to correlate logs
    debug: Optional[str] = None  # long detail for logs only

    def flash_text(self) -> str:
        base = f"{self.title}: {self.user_message}"
        if self.hint:
            base += f" ({self.hint})"
        base += f" (ref: {self.support_id})"
        return base

    def log_line(self) -> str:
        return f"[{self.code}] {self.debug} (ref={self.support_id})"


def _is_openai_dns_error(exc: Exception) -> bool:
    # Typical chain: httpx.ConnectError -> httpcore.ConnectError -> OSError [Errno 8]
    msg = str(exc)
    return ("nodename nor servname provided" in msg) or ("Name or service not known" in msg)


def _is_openai_rate_or_quota(exc: Exception) -> Optional[str]:
    s = str(exc).lower()
    if "quota" in s:
        return "QUOTA"
    if isinstance(exc, openai.RateLimitError) or "rate_limit" in s or "rate limit" in s:
        return "RATE_LIMIT"
    return None


def _is_openai_auth_error(exc: Exception) -> bool:
    return isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError))


def _is_bad_payload(exc: Exception) -> bool:
    # json.JSONDecodeError is a ValueError; so is a non-object body we reject
    return isinstance(exc, (ValueError, TypeError)) and not isinstance(exc, ValidationError)


def build_error_notice(exc: Exception, context: Optional[Dict[str, Any]] = None) -> ErrorNotice:
    """
    Map raw exceptions to user-safe notices.
    Keep messages short; add 'hint' for one actionable step.
    """
    ctx = context or {}
    op = ctx.get("op", "operation")
    support_id = uuid.uuid4().hex[:8]
    debug = f"{op}: {exc!r}"

    # 1) VPN/DNS / OpenAI reachability
    if _is_openai_dns_error(exc):
        return ErrorNotice(
            code="NETWORK_DNS",
            title="Network problem",
            user_message="We couldn't reach OpenAI from this network.",
            hint="If you're on a VPN or corporate Wi-Fi, disconnect or try another network.",
            support_id=support_id,
            debug=debug,
        )

    # 2) OpenAI rate/quota
    rate_or_quota = _is_openai_rate_or_quota(exc)
    if rate_or_quota == "RATE_LIMIT":
        return ErrorNotice(
            code="OPENAI_RATE",
            title="Busy right now",
            user_message="We're sending too many requests at once.",
            hint="Please retry in a few seconds.",
            support_id=support_id,
            debug=debug,
        )
    if rate_or_quota == "QUOTA":
        return ErrorNotice(
            code="OPENAI_QUOTA",
            title="Quota exceeded",
            user_message="We've hit our OpenAI usage quota.",
            hint="We'll restore service soon.",
            support_id=support_id,
            debug=debug,
        )

    # 3) Bad / revoked key
    if _is_openai_auth_error(exc):
        return ErrorNotice(
            code="OPENAI_AUTH",
            title="AI service unavailable",
            user_message="The AI service rejected our credentials.",
            hint="Check OPENAI_API_KEY on the server.",
            support_id=support_id,
            debug=debug,
        )

    # 4) httpx / openai timeouts and generic network
    if isinstance(exc, (openai.APITimeoutError, httpx.ConnectTimeout, httpx.ReadTimeout)):
        return ErrorNotice(
            code="NETWORK_TIMEOUT",
            title="Network timeout",
            user_message="A request took too long to respond.",
            hint="Please retry in a moment.",
            support_id=support_id,
            debug=debug,
        )
    if isinstance(exc, (openai.APIConnectionError, httpx.ConnectError)):
        return ErrorNotice(
            code="NETWORK_CONNECT",
            title="Network problem",
            user_message="We couldn't connect to the AI service.",
            hint="Please retry in a moment.",
            support_id=support_id,
            debug=debug,
        )

    # 5) Body we can't read (bad JSON, wrong shape)
    if _is_bad_payload(exc):
        return ErrorNotice(
            code="BAD_PAYLOAD",
            title="Invalid request",
            user_message="We couldn't read the submitted form.",
            hint="Refresh the page and try again.",
            support_id=support_id,
            debug=debug,
        )

    # 6) Fallback catch-all
    return ErrorNotice(
        code="UNKNOWN",
        title="Something went wrong",
        user_message="An unexpected error occurred.",
        hint="Please retry. If it persists, contact support.",
        support_id=support_id,
        debug=debug,
    )
