import pytest

from snippetboard.api import ApiFailure, ApiResult
from snippetboard.snippet import Snippet


class StubSnippetClient:
    """In-memory snippet collection that records every call made to it."""

    def __init__(self, records=None):
        self.records = [Snippet.model_validate(record) for record in records or []]
        self.calls = []
        self.failures = {}
        self.gates = {}
        self._next_id = 100

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_exc):
        await self.aclose()

    async def aclose(self):
        self.calls.append(("close",))

    def fail(self, operation, message=None, status_code=500):
        self.failures[operation] = ApiFailure(message=message, status_code=status_code)

    async def list_snippets(self, language=None):
        self.calls.append(("list", language))
        gate = self.gates.get(language)
        if gate is not None:
            await gate.wait()
        if "list" in self.failures:
            return ApiResult.failed(self.failures["list"])
        return ApiResult.success(
            [record for record in self.records if not language or record.language == language]
        )

    async def create_snippet(self, draft):
        self.calls.append(("create", draft.to_payload()))
        if "create" in self.failures:
            return ApiResult.failed(self.failures["create"])
        self._next_id += 1
        record = Snippet(id=str(self._next_id), **draft.to_payload())
        self.records.insert(0, record)
        return ApiResult.success(record)

    async def update_snippet(self, snippet_id, draft):
        self.calls.append(("update", snippet_id, draft.to_payload()))
        if "update" in self.failures:
            return ApiResult.failed(self.failures["update"])
        record = Snippet(id=snippet_id, **draft.to_payload())
        self.records = [record if r.id == snippet_id else r for r in self.records]
        return ApiResult.success(record)

    async def delete_snippet(self, snippet_id):
        self.calls.append(("delete", snippet_id))
        if "delete" in self.failures:
            return ApiResult.failed(self.failures["delete"])
        self.records = [r for r in self.records if r.id != snippet_id]
        return ApiResult.success(None)

    def calls_named(self, name):
        return [call for call in self.calls if call[0] == name]


SAMPLE_RECORDS = [
    {"_id": "1", "title": "A", "language": "python", "code": "print('a')\n", "description": ""},
    {"_id": "2", "title": "B", "language": "javascript", "code": "console.log('b');", "description": "logs b"},
]


@pytest.fixture
def stub_client():
    return StubSnippetClient(SAMPLE_RECORDS)


@pytest.fixture
def make_client():
    return StubSnippetClient
