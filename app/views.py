# app/views.py
import json
import math
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from .errors import (
    build_error_notice,
    ValidationError,
    UnexpectedError,
    INVALID_PAYLOAD_MESSAGE,
)
from .form import FormCollector, PHILOSOPHIES
from .logger import logger
from .summarizer import draft_plan

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


def _reject_constant(token: str):
    # json.loads accepts NaN/Infinity; JSONResponse cannot echo them back
    raise ValueError(f"non-standard JSON constant: {token}")


def _finite_float(token: str) -> float:
    # 1e999 parses to inf without going through parse_constant
    value = float(token)
    if math.isinf(value):
        raise ValueError(f"out of range number: {token}")
    return value


def _settings(request: Request):
    return request.app.state.settings


def _client(request: Request):
    return getattr(request.app.state, "openai_client", None)


def _render_form(request: Request, form: FormCollector, summary: str = None, error: str = None):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "form": form,
            "philosophies": PHILOSOPHIES,
            "summary": summary,
            "error": error,
            "generative": _settings(request).generative_enabled,
        },
    )


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    return _render_form(request, FormCollector())


@router.post("/", response_class=HTMLResponse)
async def index_post(request: Request):
    form_data = await request.form()
    form = FormCollector.from_form(form_data)
    action = (form_data.get("action") or "").strip()

    if action == "preview":
        return _render_form(request, form, summary=form.preview())

    if action == "generate":
        try:
            result = await run_in_threadpool(
                draft_plan, form.to_payload(), _settings(request), _client(request)
            )
        except ValidationError as e:
            return _render_form(request, form, error=e.message)
        except UnexpectedError as e:
            return _render_form(request, form, error=e.notice.flash_text())
        return _render_form(request, form, summary=result["summary"])

    form.apply(action)
    return _render_form(request, form)


@router.post("/api/draft-plan")
async def api_draft_plan(request: Request):
    try:
        raw = await request.body()
        body = json.loads(raw or b"", parse_constant=_reject_constant, parse_float=_finite_float)
        if not isinstance(body, dict):
            raise ValueError(f"expected a JSON object, got {type(body).__name__}")
    except (ValueError, RecursionError) as e:
        # bad JSON (JSONDecodeError/UnicodeDecodeError), NaN/Infinity, absurd nesting or wrong shape
        notice = build_error_notice(e, {"op": "draft-plan.parse"})
        logger.error(notice.log_line())
        return JSONResponse({"error": INVALID_PAYLOAD_MESSAGE}, status_code=400)

    try:
        result = await run_in_threadpool(draft_plan, body, _settings(request), _client(request))
    except ValidationError as e:
        logger.info(f"draft-plan rejected: {e.message}")
        return JSONResponse({"error": e.message}, status_code=400)
    except UnexpectedError as e:
        # already logged with its support id
        return JSONResponse({"error": e.public_message}, status_code=400)
    except Exception as e:
        notice = build_error_notice(e, {"op": "draft-plan"})
        logger.error(notice.log_line())
        return JSONResponse({"error": INVALID_PAYLOAD_MESSAGE}, status_code=400)

    return JSONResponse(result)
