"""Test doubles for the search, completion and logo services."""

import json
from types import SimpleNamespace

from ai_tools_directory.search import SearchResponse


def make_completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            response = json.dumps(response)
        return make_completion(response)


class FakeCompletionClient:
    """Stands in for AsyncOpenAI: answers chat.completions.create from a queue."""

    def __init__(self, *responses):
        self.chat = SimpleNamespace(completions=FakeCompletions(responses))

    @property
    def calls(self):
        return self.chat.completions.calls


class FakeSearchClient:
    def __init__(self, responses=None, total_counts=None):
        self.responses = responses or {}
        self.total_counts = total_counts or {}
        self.queries = []

    async def search(self, query, count=20):
        self.queries.append(query)
        if query in self.total_counts:
            return SearchResponse(total_count=self.total_counts[query])
        return SearchResponse(results=list(self.responses.get(query, [])))


class FakeLogoResolver:
    def __init__(self, logo="https://logos.example/logo.png"):
        self.logo = logo
        self.calls = []

    async def resolve(self, name, url, fallback=""):
        self.calls.append((name, url))
        return self.logo
