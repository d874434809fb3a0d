import httpx
import pytest
from pydantic import SecretStr

from recipe_pipeline.app.core.errors import (
    MalformedModelResponseError,
    MissingAPIKeyError,
    ModelError,
    UnsupportedModelError,
)
from recipe_pipeline.app.schemas.ai_config import AIModel, UserAIConfig
from recipe_pipeline.app.schemas.shopping_list import Category
from recipe_pipeline.app.services.ai.claude_model import ClaudeModel
from recipe_pipeline.app.services.ai.gpt_model import GPTModel
from recipe_pipeline.app.services.ai.models import ModelType, resolve_model_type
from recipe_pipeline.app.services.ai_preferences import resolve_model_preferences

USER_KEY = "sk-user-secret-123"


def user_config(provider="openai", version="gpt-4", api_key=USER_KEY):
    return UserAIConfig(
        id="cfg-1",
        user_id="u1",
        ai_model_id="m1",
        api_key=SecretStr(api_key) if api_key is not None else None,
        is_default=True,
        ai_model=AIModel(id="m1", name=version, provider=provider, model_version=version),
    )


@pytest.mark.parametrize(
    "provider, version, expected",
    [
        ("openai", "gpt-4", ModelType.GPT_4),
        ("OpenAI", "gpt-3.5-turbo", ModelType.GPT_35_TURBO),
        ("anthropic", "claude-3-7-sonnet-latest", ModelType.CLAUDE),
        ("anthropic", "claude-2", ModelType.CLAUDE),
    ],
)
def test_resolve_model_type(provider, version, expected):
    assert resolve_model_type(provider, version) is expected


@pytest.mark.parametrize("provider, version", [("openai", "gpt-9"), ("mistral", "large"), ("anthropic", "gpt-4")])
def test_resolve_model_type_unknown(provider, version):
    with pytest.raises(UnsupportedModelError):
        resolve_model_type(provider, version)


def test_model_type_providers():
    assert ModelType.GPT_4.provider == "openai"
    assert ModelType.GPT_35_TURBO.provider == "openai"
    assert ModelType.CLAUDE.provider == "anthropic"


def test_factory_builds_each_variant(model_factory):
    gpt = model_factory.create_model(ModelType.GPT_35_TURBO, "k1")
    claude = model_factory.create_model("claude-3-7-sonnet-latest", SecretStr("k2"))

    assert isinstance(gpt, GPTModel)
    assert gpt.model_name == "gpt-3.5-turbo"
    assert isinstance(claude, ClaudeModel)
    assert claude.model_name == "claude-3-7-sonnet-latest"


def test_factory_rejects_unknown_type_and_missing_key(model_factory):
    with pytest.raises(UnsupportedModelError):
        model_factory.create_model("llama-70b", "k")
    with pytest.raises(MissingAPIKeyError):
        model_factory.create_model(ModelType.GPT_4, "")
    with pytest.raises(MissingAPIKeyError):
        model_factory.create_model(ModelType.CLAUDE, None)


def test_repr_masks_key(model_factory):
    model = model_factory.create_model(ModelType.GPT_4, USER_KEY)
    assert USER_KEY not in repr(model)


def test_preferences_without_config_use_system_defaults(defaults):
    prefs = resolve_model_preferences(None, defaults)
    assert prefs.model_type is ModelType.CLAUDE
    assert prefs.api_key.get_secret_value() == "sk-ant-default"


def test_preferences_use_user_key(defaults):
    prefs = resolve_model_preferences(user_config(), defaults)
    assert prefs.model_type is ModelType.GPT_4
    assert prefs.api_key.get_secret_value() == USER_KEY


@pytest.mark.parametrize("api_key", [None, ""])
def test_preferences_fall_back_to_provider_key(defaults, api_key):
    prefs = resolve_model_preferences(user_config(api_key=api_key), defaults)
    assert prefs.model_type is ModelType.GPT_4
    assert prefs.api_key.get_secret_value() == "sk-openai-default"


def test_preferences_reject_unmapped_model(defaults):
    with pytest.raises(UnsupportedModelError):
        resolve_model_preferences(user_config(provider="openai", version="gpt-9"), defaults)


@pytest.fixture
def exported_provider_urls(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_BASE_URL", "http://127.0.0.1:48271")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://127.0.0.1:48272")


@pytest.mark.asyncio
async def test_gpt_request_shape(exported_provider_urls, model_factory, llm):
    llm.queue('[{"step_number": 1, "instruction": "Mix"}]')
    model = model_factory.create_model(ModelType.GPT_4, USER_KEY)

    steps = await model.parse_instructions("mix it")

    request = llm.requests[0]
    assert request.url == "https://api.openai.com/v1/chat/completions"
    assert request.headers["authorization"] == f"Bearer {USER_KEY}"
    body = llm.body()
    assert body["model"] == "gpt-4"
    assert body["max_tokens"] == 2000
    assert "mix it" in llm.prompt()
    assert steps[0].instruction == "Mix"


@pytest.mark.asyncio
async def test_claude_request_shape(exported_provider_urls, model_factory, llm):
    llm.queue('{"title": "Toast", "ingredients": [{"description": "2 slices bread"}], "instructions": []}')
    model = model_factory.create_model(ModelType.CLAUDE, USER_KEY)

    recipe = await model.parse("Toast the bread.", "webpage")

    request = llm.requests[0]
    assert request.url == "https://api.anthropic.com/v1/messages"
    assert request.headers["x-api-key"] == USER_KEY
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert llm.body()["model"] == "claude-3-7-sonnet-latest"
    assert "Parse the following webpage content" in llm.prompt()
    assert recipe.title == "Toast"
    assert recipe.ingredients[0].name == "bread"


@pytest.mark.asyncio
async def test_categorize_prompt_lists_items(model_factory, llm):
    llm.queue('{"milk": "DAIRY", "bread": "BAKERY"}')
    model = model_factory.create_model(ModelType.GPT_4, USER_KEY)

    assert await model.categorize_items(["milk", "bread"]) == [Category.DAIRY, Category.BAKERY]
    assert 'Items:["milk", "bread"]' in llm.prompt()
    assert await model.categorize_items([]) == []
    assert len(llm.requests) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 429, 500])
async def test_provider_status_errors(model_factory, llm, status):
    llm.queue(httpx.Response(status, json={"error": {"message": f"Incorrect API key provided: {USER_KEY}"}}))
    model = model_factory.create_model(ModelType.GPT_4, USER_KEY)

    with pytest.raises(ModelError) as excinfo:
        await model.parse("content", "webpage")
    assert excinfo.value.status_code == status
    assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)
    assert USER_KEY not in str(excinfo.value)


@pytest.mark.asyncio
async def test_timeout_maps_to_model_error(model_factory, llm):
    llm.queue(httpx.ReadTimeout("timed out"))
    model = model_factory.create_model(ModelType.CLAUDE, USER_KEY)

    with pytest.raises(ModelError) as excinfo:
        await model.parse_instructions("text")
    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.TimeoutException)


@pytest.mark.asyncio
async def test_malformed_envelope(model_factory, llm):
    llm.queue(httpx.Response(200, json={"unexpected": True}), httpx.Response(200, text="<html>"))
    model = model_factory.create_model(ModelType.GPT_4, USER_KEY)

    with pytest.raises(ModelError):
        await model.parse("content", "webpage")
    with pytest.raises(ModelError):
        await model.parse("content", "webpage")


@pytest.mark.asyncio
async def test_unparseable_reply_is_not_a_model_error(model_factory, llm):
    llm.queue("Sorry, I can't help with that.")
    model = model_factory.create_model(ModelType.CLAUDE, USER_KEY)

    with pytest.raises(MalformedModelResponseError):
        await model.parse("content", "webpage")
