# app/prompt.py
from .planning import PlanRequest, describe_children

SYSTEM_PROMPT = (
    "You are a helpful assistant that specializes in homeschool planning summaries for parents."
)

DRAFT_PLAN_PROMPT = """\
You are an assistant helping a homeschool parent plan the year.

Context:
- Children: {children}
- Homeschooling philosophy: {philosophy}
- Location: {location} (use this only for general seasonality, do NOT assume exact curriculum standards)
- Parent priorities for this year: {goals}

Task:
Write a clear, parent-friendly "draft planning summary" in 3–6 short paragraphs.

Include:
- A brief overall perspective on the year based on the philosophy
- Key focus areas for each child (high-level, not a detailed schedule)
- Suggestions for how to balance multiple children and grade levels
- 2–4 concrete next steps the parent can take this week to move forward

Tone:
- Encouraging, practical, and clear
- No jargon
- Do NOT mention that you are an AI or reference prompts or tokens.
"""

LOCAL_SUMMARY_TEMPLATE = """\
Draft planning summary (local fallback)
--------------------------------------
Children: {children}
Philosophy: {philosophy}
Location: {location}
Parent priorities: {goals}

Note: The OpenAI API key is not configured on the server, so this is a simple placeholder summary instead of an AI-generated one.
"""

# Shown by the form's "Preview" button; never leaves the server.
PREVIEW_SUMMARY_TEMPLATE = """\
Draft planning summary
----------------------
Children: {children}
Philosophy: {philosophy}
Location: {location}
Parent priorities: {goals}

Next step (future): send this data to the AI backend to generate a year plan, weekly schedule, and resource suggestions.
"""

EMPTY_SUMMARY_FALLBACK = "Unable to generate a summary at this time."


def _render(template: str, plan: PlanRequest) -> str:
    return template.format(
        children=describe_children(plan.children),
        philosophy=plan.philosophy,
        location=plan.location,
        goals=plan.goals,
    ).strip()


def build_plan_prompt(plan: PlanRequest) -> str:
    return _render(DRAFT_PLAN_PROMPT, plan)


def build_local_summary(plan: PlanRequest) -> str:
    return _render(LOCAL_SUMMARY_TEMPLATE, plan)


def build_preview_summary(plan: PlanRequest) -> str:
    return _render(PREVIEW_SUMMARY_TEMPLATE, plan)
