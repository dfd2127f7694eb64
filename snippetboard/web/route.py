"""FastAPI routes for the snippet board page and its form posts."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import ClientSettings
from ..controllers import CollectionController
from ..controllers.collection import DELETE_PROMPT, EMPTY_MESSAGE
from ..controllers.forms import SnippetFormController
from ..highlight import highlight_html
from ..snippet import QUICK_FILTERS, Snippet, language_choices, language_label

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_settings(request: Request) -> ClientSettings:
    settings = getattr(request.app.state, "settings", None)
    if not isinstance(settings, ClientSettings):
        raise RuntimeError("Client settings have not been initialised")
    return settings


def get_controller(request: Request) -> CollectionController:
    controller = getattr(request.app.state, "controller", None)
    if not isinstance(controller, CollectionController):
        raise RuntimeError("Snippet controller has not been initialised")
    return controller


def _redirect_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


def _require_snippet(controller: CollectionController, snippet_id: str) -> Snippet:
    snippet = controller.find(snippet_id)
    if snippet is None:
        raise HTTPException(status_code=404, detail="Snippet not found")
    return snippet


def _form_fields(title: str, language: str, code: str, description: str) -> Dict[str, str]:
    # Browsers submit textarea content with CRLF line breaks.
    return {
        "title": title,
        "language": language,
        "code": code.replace("\r\n", "\n"),
        "description": description,
    }


def _form_context(form: SnippetFormController, settings: ClientSettings, *, blank_choice: bool) -> Dict[str, Any]:
    preview_language, preview_code = form.preview()
    choices = language_choices(form.draft.language)
    if blank_choice:
        choices = [("", "Select Language"), *choices]
    return {
        "draft": form.draft,
        "error": form.error,
        "success": form.success,
        "choices": choices,
        "preview_language": preview_language,
        "preview_html": highlight_html(preview_code, preview_language, settings.highlight_style),
    }


def build_page_context(controller: CollectionController, settings: ClientSettings) -> Dict[str, Any]:
    state = controller.state

    filters: List[Dict[str, Any]] = [
        {"value": "", "label": f"All ({len(state.snippets)})", "active": not state.filter_language}
    ]
    for value, label in QUICK_FILTERS:
        filters.append({"value": value, "label": label, "active": state.filter_language == value})

    items = []
    for snippet in state.snippets:
        editing = controller.edit_form is not None and state.editing_id == snippet.id
        items.append(
            {
                "snippet": snippet,
                "editing": editing,
                "language_label": language_label(snippet.language),
                "code_html": None
                if editing
                else highlight_html(snippet.code, snippet.language, settings.highlight_style),
            }
        )

    edit_form = None
    if controller.edit_form is not None:
        edit_form = _form_context(controller.edit_form, settings, blank_choice=False)

    return {
        "state": state,
        "filters": filters,
        "items": items,
        "create_form": _form_context(controller.create_form, settings, blank_choice=True),
        "edit_form": edit_form,
        "notice": controller.pop_notice(),
        "empty_message": EMPTY_MESSAGE,
    }


router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    controller: CollectionController = Depends(get_controller),
    settings: ClientSettings = Depends(get_settings),
) -> HTMLResponse:
    state = controller.state
    if not state.loaded and not state.loading and state.error is None:
        await controller.load()
    return templates.TemplateResponse(request, "index.html", build_page_context(controller, settings))


@router.post("/filter")
async def set_filter(
    language: str = Form(""),
    controller: CollectionController = Depends(get_controller),
) -> RedirectResponse:
    await controller.set_filter(language)
    return _redirect_home()


@router.post("/refresh")
async def refresh(controller: CollectionController = Depends(get_controller)) -> RedirectResponse:
    await controller.load()
    return _redirect_home()


@router.post("/snippets")
async def create_snippet(
    title: str = Form(""),
    language: str = Form(""),
    code: str = Form(""),
    description: str = Form(""),
    action: str = Form("save"),
    controller: CollectionController = Depends(get_controller),
) -> RedirectResponse:
    form = controller.create_form
    form.update(**_form_fields(title, language, code, description))
    if action == "save":
        await form.submit()
    return _redirect_home()


@router.post("/snippets/{snippet_id}/edit")
async def start_edit(
    snippet_id: str,
    controller: CollectionController = Depends(get_controller),
) -> RedirectResponse:
    _require_snippet(controller, snippet_id)
    controller.set_edit_target(snippet_id)
    return _redirect_home()


@router.post("/snippets/{snippet_id}/cancel")
async def cancel_edit(
    snippet_id: str,
    controller: CollectionController = Depends(get_controller),
) -> RedirectResponse:
    form = controller.edit_form
    if form is not None and form.snippet_id == snippet_id:
        form.cancel()
    return _redirect_home()


@router.post("/snippets/{snippet_id}")
async def update_snippet(
    snippet_id: str,
    title: str = Form(""),
    language: str = Form(""),
    code: str = Form(""),
    description: str = Form(""),
    action: str = Form("save"),
    controller: CollectionController = Depends(get_controller),
) -> RedirectResponse:
    _require_snippet(controller, snippet_id)
    form = controller.edit_form
    if form is None or form.snippet_id != snippet_id:
        raise HTTPException(status_code=409, detail="Snippet is not being edited")

    form.update(**_form_fields(title, language, code, description))
    if action == "save":
        await form.submit()
    return _redirect_home()


@router.get("/snippets/{snippet_id}/delete", response_class=HTMLResponse)
async def confirm_delete(
    request: Request,
    snippet_id: str,
    controller: CollectionController = Depends(get_controller),
) -> HTMLResponse:
    snippet = _require_snippet(controller, snippet_id)
    return templates.TemplateResponse(
        request,
        "confirm.html",
        {"snippet": snippet, "prompt": DELETE_PROMPT},
    )


@router.post("/snippets/{snippet_id}/delete")
async def delete_snippet(
    snippet_id: str,
    confirm: str = Form("no"),
    controller: CollectionController = Depends(get_controller),
) -> RedirectResponse:
    _require_snippet(controller, snippet_id)
    answer = confirm == "yes"
    await controller.delete(snippet_id, confirm=lambda _prompt: answer)
    return _redirect_home()


__all__ = ["build_page_context", "router", "templates"]
