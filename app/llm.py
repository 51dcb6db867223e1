# app/llm.py
from typing import Optional

from openai import OpenAI

from .config import Settings
from .logger import logger
from .prompt import SYSTEM_PROMPT, EMPTY_SUMMARY_FALLBACK


def get_openai(settings: Settings) -> Optional[OpenAI]:
    """Build the shared client, or None when no key is configured (local mode)."""
    if not settings.generative_enabled:
        logger.info("[LLM] OPENAI_API_KEY not set; using local summaries")
        return None

    logger.debug(f"[LLM] Using OpenAI base_url={settings.openai_base_url} model={settings.model}")
    kwargs = {"api_key": settings.openai_api_key, "base_url": settings.openai_base_url}
    if settings.request_timeout is not None:
        kwargs["timeout"] = settings.request_timeout
    return OpenAI(**kwargs)


def generate_summary(client: OpenAI, prompt: str, settings: Settings) -> str:
    """
    One chat completion: fixed system message + the assembled prompt.
    Errors propagate; the caller decides how to report them.
    """
    logger.debug("calling OpenAI...")
    resp = client.chat.completions.create(
        model=settings.model,
        temperature=settings.temperature,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
    )
    logger.debug("resp OK")

    text = ""
    if resp.choices:
        text = resp.choices[0].message.content or ""
    text = text.strip()
    if not text:
        logger.warning("[LLM] empty completion; using fallback text")
        return EMPTY_SUMMARY_FALLBACK
    return text
