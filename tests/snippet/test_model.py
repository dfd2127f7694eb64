from snippetboard.snippet import QUICK_FILTERS, Snippet, SnippetDraft, language_choices, language_label


def test_snippet_accepts_document_store_id():
    snippet = Snippet.model_validate(
        {"_id": "65f0c1", "title": "A", "language": "python", "code": "x = 1"}
    )

    assert snippet.id == "65f0c1"
    assert snippet.description == ""


def test_snippet_accepts_plain_and_numeric_ids():
    assert Snippet.model_validate({"id": "abc", "title": "A", "language": "go", "code": "x"}).id == "abc"
    assert Snippet.model_validate({"id": 1, "title": "A", "language": "go", "code": "x"}).id == "1"


def test_null_description_reads_as_empty():
    snippet = Snippet.model_validate(
        {"_id": "1", "title": "A", "language": "python", "code": "x", "description": None}
    )

    assert snippet.description == ""
    assert snippet.to_draft().description == ""


def test_server_fields_are_preserved():
    snippet = Snippet.model_validate(
        {"_id": "1", "title": "A", "language": "python", "code": "x", "createdAt": "2024-01-01"}
    )

    assert snippet.model_dump()["createdAt"] == "2024-01-01"


def test_code_whitespace_is_kept_verbatim():
    code = "def f():\n\treturn 1\n\n"
    snippet = Snippet(id="1", title="A", language="python", code=code)

    assert snippet.code == code
    assert snippet.to_draft().to_payload()["code"] == code


def test_missing_fields_treats_whitespace_as_empty():
    draft = SnippetDraft(title="  ", language="python", code="")

    assert draft.missing_fields() == ["title", "code"]
    assert SnippetDraft(title="T", language="python", code="x").missing_fields() == []


def test_payload_never_carries_an_id():
    snippet = Snippet(id="1", title="A", language="python", code="x", description="d")

    assert snippet.to_draft().to_payload() == {
        "title": "A",
        "language": "python",
        "code": "x",
        "description": "d",
    }


def test_language_choices_keep_unlisted_language():
    values = [value for value, _label in language_choices("rust")]

    assert values[:4] == ["javascript", "python", "java", "csharp"]
    assert values[-1] == "rust"
    assert [value for value, _ in language_choices("python")] == values[:4]


def test_quick_filters_do_not_limit_languages():
    assert "java" not in dict(QUICK_FILTERS)
    snippet = Snippet(id="1", title="A", language="java", code="int i=0;")

    assert snippet.language == "java"
    assert language_label("csharp") == "C#"
    assert language_label("haskell") == "haskell"
