import json

import httpx
import pytest

from recipe_pipeline.app.core.config import Settings
from recipe_pipeline.app.services.ai.models import ModelFactory
from recipe_pipeline.app.services.ai_preferences import ModelDefaults


def claude_reply(text: str) -> dict:
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
    }


def openai_reply(text: str) -> dict:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}


class ScriptedLLM:
    """Stands in for both providers: answers with queued replies and records requests.

    A queued ``str`` is wrapped in the envelope of whichever API was called;
    a queued ``httpx.Response`` or exception is returned or raised as-is.
    """

    def __init__(self):
        self.replies = []
        self.requests = []

    def queue(self, *replies):
        self.replies.extend(replies)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        if request.url.path.endswith("/v1/messages"):
            return httpx.Response(200, json=claude_reply(reply))
        return httpx.Response(200, json=openai_reply(reply))

    def body(self, idx: int = 0) -> dict:
        return json.loads(self.requests[idx].content)

    def prompt(self, idx: int = 0) -> str:
        return self.body(idx)["messages"][0]["content"]


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-openai-default",
        ANTHROPIC_API_KEY="sk-ant-default",
        OPENAI_BASE_URL="https://api.openai.com",
        ANTHROPIC_BASE_URL="https://api.anthropic.com",
        ANTHROPIC_VERSION="2023-06-01",
        CLAUDE_MODEL_NAME="claude-3-7-sonnet-latest",
        LLM_MAX_TOKENS=2000,
        SCRAPER_USER_AGENT="Recipe Parser Bot/1.0",
        FETCH_MAX_REDIRECTS=10,
        DEFAULT_AI_MODEL="claude-3-7-sonnet-latest",
        FETCH_BLOCK_PRIVATE_HOSTS=True,
    )


@pytest.fixture
def llm():
    return ScriptedLLM()


@pytest.fixture
def model_factory(settings, llm):
    client = httpx.AsyncClient(transport=httpx.MockTransport(llm.handler))
    return ModelFactory(settings, client=client)


@pytest.fixture
def defaults(settings):
    return ModelDefaults.from_settings(settings)
