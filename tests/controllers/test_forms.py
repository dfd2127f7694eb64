import pytest

from snippetboard.controllers import CreateFormController, EditFormController
from snippetboard.controllers.forms import REQUIRED_FIELDS_MESSAGE
from snippetboard.snippet import Snippet


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["title", "language", "code"])
async def test_create_rejects_missing_required_field(stub_client, missing):
    form = CreateFormController(stub_client)
    fields = {"title": "X", "language": "java", "code": "int i=0;"}
    fields[missing] = ""
    form.update(**fields)

    assert await form.submit() is None
    assert form.error == REQUIRED_FIELDS_MESSAGE
    assert stub_client.calls == []


@pytest.mark.asyncio
async def test_create_rejects_whitespace_only_title(stub_client):
    form = CreateFormController(stub_client)
    form.update(title="   ", language="python", code="pass")

    assert await form.submit() is None
    assert form.error == REQUIRED_FIELDS_MESSAGE
    assert stub_client.calls == []


@pytest.mark.asyncio
async def test_create_success_resets_draft_and_reports_record(stub_client):
    created = []
    form = CreateFormController(stub_client, on_created=created.append)
    form.update(title="X", language="java", code="int i=0;")

    record = await form.submit()

    assert record is not None
    assert created == [record]
    assert record.id
    assert form.success == 'Snippet "X" created successfully!'
    assert form.error is None
    assert form.draft.title == ""
    assert form.draft.code == ""
    assert stub_client.calls_named("create") == [
        ("create", {"title": "X", "language": "java", "code": "int i=0;", "description": ""})
    ]


@pytest.mark.asyncio
async def test_create_failure_keeps_draft_and_shows_server_message(stub_client):
    stub_client.fail("create", message="Language not supported")
    created = []
    form = CreateFormController(stub_client, on_created=created.append)
    form.update(title="X", language="cobol", code="DISPLAY 'X'.")

    assert await form.submit() is None
    assert form.error == "Language not supported"
    assert form.success is None
    assert form.draft.title == "X"
    assert created == []


@pytest.mark.asyncio
async def test_create_failure_without_message_uses_generic_text(stub_client):
    stub_client.fail("create")
    form = CreateFormController(stub_client)
    form.update(title="X", language="java", code="int i=0;")

    await form.submit()

    assert form.error == "Failed to create snippet. Check server connection."


@pytest.mark.asyncio
async def test_submit_clears_previous_banners(stub_client):
    form = CreateFormController(stub_client)
    await form.submit()
    assert form.error == REQUIRED_FIELDS_MESSAGE

    form.update(title="X", language="java", code="int i=0;")
    await form.submit()

    assert form.error is None
    assert form.success is not None


def test_update_rejects_unknown_fields(stub_client):
    form = CreateFormController(stub_client)

    with pytest.raises(ValueError):
        form.update(id="1")


def test_preview_placeholders(stub_client):
    snippet = Snippet(id="1", title="A", language="", code="")
    create_form = CreateFormController(stub_client)
    edit_form = EditFormController(stub_client, snippet, on_updated=lambda _r: None, on_cancel=lambda: None)

    assert create_form.preview() == ("text", "// Start typing your code here...")
    assert edit_form.preview() == ("text", "// Paste your code here...")

    create_form.update(language="python", code="x = 1")
    assert create_form.preview() == ("python", "x = 1")


def _edit_form(client, snippet, updated=None, cancelled=None):
    return EditFormController(
        client,
        snippet,
        on_updated=(updated.append if updated is not None else lambda _r: None),
        on_cancel=(lambda: cancelled.append(True)) if cancelled is not None else (lambda: None),
    )


def test_edit_draft_starts_from_record(stub_client):
    snippet = stub_client.records[1]
    form = _edit_form(stub_client, snippet)

    assert form.snippet_id == "2"
    assert form.draft.model_dump() == {
        "title": "B",
        "language": "javascript",
        "code": "console.log('b');",
        "description": "logs b",
    }


@pytest.mark.asyncio
async def test_edit_success_reports_server_record(stub_client):
    updated = []
    form = _edit_form(stub_client, stub_client.records[0], updated=updated)
    form.update(title="A2")

    record = await form.submit()

    assert updated == [record]
    assert record.title == "A2"
    assert form.success == 'Snippet "A2" updated successfully!'
    assert stub_client.calls_named("update")[0][1] == "1"


@pytest.mark.asyncio
async def test_edit_failure_keeps_form_open(stub_client):
    stub_client.fail("update")
    updated = []
    form = _edit_form(stub_client, stub_client.records[0], updated=updated)
    form.update(code="print('changed')")

    assert await form.submit() is None
    assert form.error == "Failed to update snippet. Check server connection."
    assert form.draft.code == "print('changed')"
    assert updated == []


@pytest.mark.asyncio
async def test_edit_validation_blocks_network(stub_client):
    form = _edit_form(stub_client, stub_client.records[0])
    form.update(code="")

    assert await form.submit() is None
    assert form.error == REQUIRED_FIELDS_MESSAGE
    assert stub_client.calls == []


def test_cancel_reverts_without_touching_record(stub_client):
    original = stub_client.records[0]
    cancelled = []
    form = _edit_form(stub_client, original, cancelled=cancelled)
    form.update(title="changed")

    form.cancel()

    assert cancelled == [True]
    assert form.draft.title == "A"
    assert original.title == "A"
    assert stub_client.calls == []
