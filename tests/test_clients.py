from types import SimpleNamespace

import httpx
import openai
import pytest
import requests

from vibe_engine.errors import GenerationFailure
from vibe_engine.flows import Plan
from vibe_engine.generate import EchoDevClient, GenerationConfig, GenerationResult, Message
from vibe_engine.generate.clients import GroundedClient, build_model_client
from vibe_engine.generate.clients import ollama_client
from vibe_engine.generate.clients.ollama_client import OllamaClient
from vibe_engine.generate.clients.openai_client import OpenAIClient
from vibe_engine.search import ContextChunk
from vibe_engine.settings import Settings

MESSAGES = [
    Message(role="system", text="SYS"),
    Message(role="user", text="earlier"),
    Message(role="model", text="reply"),
    Message(role="user", text="latest"),
]


# --- Echo ---------------------------------------------------------

def test_echo_returns_latest_user_turn():
    out = EchoDevClient().generate(MESSAGES, GenerationConfig())
    assert out.text == "[ECHO RESPONSE]\nlatest"
    assert out.meta["engine"] == "echo"


def test_echo_structured_fills_schema_fields():
    out = EchoDevClient().generate(MESSAGES, GenerationConfig(structured_output=Plan))
    assert out.structured == {"title": "latest", "steps": ["latest"]}


# --- OpenAI -------------------------------------------------------

class FakeCompletions:
    def __init__(self, content=" hi there ", error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def fake_sdk(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def test_openai_maps_roles_and_config():
    completions = FakeCompletions()
    client = OpenAIClient(model="gpt-test", client=fake_sdk(completions))
    out = client.generate(MESSAGES, GenerationConfig(temperature=0.0, structured_output=Plan, max_output_tokens=50))

    assert out.text == "hi there"
    assert out.structured is None
    kw = completions.kwargs
    assert [m["role"] for m in kw["messages"]] == ["system", "user", "assistant", "user"]
    assert kw["temperature"] == 0.0
    assert kw["max_tokens"] == 50
    assert kw["response_format"]["json_schema"]["name"] == "Plan"


def test_openai_errors_become_generation_failure():
    err = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    client = OpenAIClient(client=fake_sdk(FakeCompletions(error=err)))
    with pytest.raises(GenerationFailure):
        client.generate(MESSAGES, GenerationConfig())


def test_openai_empty_completion_is_failure():
    client = OpenAIClient(client=fake_sdk(FakeCompletions(content=None)))
    with pytest.raises(GenerationFailure):
        client.generate(MESSAGES, GenerationConfig())


# --- Ollama -------------------------------------------------------

class FakeResponse:
    def __init__(self, data):
        self.data = data

    def raise_for_status(self):
        pass

    def json(self):
        return self.data


def test_ollama_payload(monkeypatch):
    seen = {}

    def fake_post(url, json=None, timeout=None):
        seen.update(url=url, payload=json)
        return FakeResponse({"response": ' {"title": "T", "steps": ["a"]} '})

    monkeypatch.setattr(ollama_client.requests, "post", fake_post)
    out = OllamaClient(model="m", host="http://ollama:11434/").generate(
        MESSAGES, GenerationConfig(temperature=0.2, structured_output=Plan, max_output_tokens=64)
    )

    assert out.text == '{"title": "T", "steps": ["a"]}'
    assert seen["url"] == "http://ollama:11434/api/generate"
    assert seen["payload"]["format"] == "json"
    assert seen["payload"]["options"] == {"temperature": 0.2, "num_predict": 64}
    assert seen["payload"]["prompt"].index("SYSTEM:") < seen["payload"]["prompt"].index("MODEL:")


def test_ollama_transport_error(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(ollama_client.requests, "post", boom)
    with pytest.raises(GenerationFailure):
        OllamaClient().generate(MESSAGES, GenerationConfig())


# --- Grounding ----------------------------------------------------

class RecordingClient:
    def __init__(self):
        self.messages = None

    def generate(self, messages, config):
        self.messages = messages
        return GenerationResult(text="ok")


class FakeRetriever:
    def __init__(self, chunks=None, error=None):
        self.chunks = chunks or []
        self.error = error
        self.queries = []

    def retrieve(self, query):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.chunks


def test_grounding_rewrites_only_latest_turn():
    inner = RecordingClient()
    retriever = FakeRetriever([ContextChunk(id="lex-1", text="Fact.", score=0.9, source="doc.md")])
    out = GroundedClient(inner, retriever).generate(MESSAGES, GenerationConfig(retrieval_augmented=True))

    assert retriever.queries == ["latest"]
    assert inner.messages[:-1] == MESSAGES[:-1]
    assert inner.messages[-1].role == "user"
    assert inner.messages[-1].text.startswith("User question:\nlatest")
    assert "Fact." in inner.messages[-1].text
    assert out.meta["citations"] == ["lex-1"]


def test_grounding_skipped_when_not_requested():
    inner = RecordingClient()
    retriever = FakeRetriever()
    GroundedClient(inner, retriever).generate(MESSAGES, GenerationConfig())
    assert retriever.queries == []
    assert inner.messages == MESSAGES


def test_grounding_without_hits_passes_messages_through():
    inner = RecordingClient()
    GroundedClient(inner, FakeRetriever()).generate(MESSAGES, GenerationConfig(retrieval_augmented=True))
    assert inner.messages == MESSAGES


def test_retrieval_error_is_generation_failure():
    client = GroundedClient(RecordingClient(), FakeRetriever(error=RuntimeError("db locked")))
    with pytest.raises(GenerationFailure):
        client.generate(MESSAGES, GenerationConfig(retrieval_augmented=True))


# --- Factory ------------------------------------------------------

def test_factory_defaults_to_echo():
    assert isinstance(build_model_client(Settings(MODEL_BACKEND="echo", SEARCH_DB_PATH=None)), EchoDevClient)


def test_factory_wraps_with_grounding(tmp_path):
    client = build_model_client(Settings(MODEL_BACKEND="ollama", SEARCH_DB_PATH=str(tmp_path / "x.db")))
    assert isinstance(client, GroundedClient)
    assert isinstance(client.inner, OllamaClient)


def test_factory_rejects_unknown_backend():
    with pytest.raises(ValueError):
        build_model_client(Settings(MODEL_BACKEND="llamafile"))


class NoneClient:
    def generate(self, messages, config):
        return None


def test_grounding_with_no_result_is_generation_failure():
    retriever = FakeRetriever([ContextChunk(id="lex-1", text="Fact.", score=0.9, source="doc.md")])
    with pytest.raises(GenerationFailure):
        GroundedClient(NoneClient(), retriever).generate(MESSAGES, GenerationConfig(retrieval_augmented=True))


@pytest.mark.parametrize("client_cls", [OllamaClient, OpenAIClient])
def test_clients_have_no_model_switch(client_cls):
    assert not hasattr(client_cls, "set_model")


def test_generation_result_is_plain_data():
    assert not hasattr(GenerationResult, "empty")
