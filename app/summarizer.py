# app/summarizer.py
from typing import Any, Dict, Optional

from openai import OpenAI

from .config import Settings
from .errors import build_error_notice, UnexpectedError, GENERATION_FAILED_MESSAGE
from .llm import generate_summary
from .logger import logger
from .planning import PlanRequest, normalize_payload
from .prompt import build_local_summary, build_plan_prompt


def summarize_plan(plan: PlanRequest, settings: Settings, client: Optional[OpenAI] = None) -> str:
    # No key or no client -> deterministic local text. Never an error.
    if client is None or not settings.generative_enabled:
        return build_local_summary(plan)

    prompt = build_plan_prompt(plan)
    try:
        return generate_summary(client, prompt, settings)
    except Exception as e:
        notice = build_error_notice(e, {"op": "openai.chat"})
        logger.error(notice.log_line())
        raise UnexpectedError(notice, GENERATION_FAILED_MESSAGE) from e


def draft_plan(raw: Any, settings: Settings, client: Optional[OpenAI] = None) -> Dict[str, Any]:
    """
    validate -> describe -> local or generated summary.
    Raises ValidationError (no filled child) or UnexpectedError (generation failed).
    """
    plan = normalize_payload(raw)
    variant = "openai" if (client is not None and settings.generative_enabled) else "local"
    logger.info(f"draft-plan: {len(plan.children)} child(ren), variant={variant}")
    summary = summarize_plan(plan, settings, client)
    return {"summary": summary, "normalized": plan.to_dict()}
