# ===============================================
# tests/test_endpoints.py
# Transport over the echo backend (no network)
# ===============================================

from fastapi.testclient import TestClient

from conftest import ScriptedClient
from vibe_engine import app as app_module
from vibe_engine.errors import GenerationFailure
from vibe_engine.flows import ArchitectFlow, GeneralChatFlow

client = TestClient(app_module.app)


def test_root_ok():
    r = client.get("/")
    assert r.status_code == 200


def test_health_ok():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_flows_listed():
    r = client.get("/flows")
    assert "conductorFlow" in r.json()["flows"]


def test_general_chat_with_history():
    r = client.post(
        "/generalChatFlow",
        json={"latestMessage": "ping", "history": [{"role": "user", "content": "hi"}]},
    )
    assert r.status_code == 200
    assert r.json() == {"result": "[ECHO RESPONSE]\nping"}


def test_classifier_returns_closed_label():
    r = client.post("/taskClassifierFlow", json={"latestMessage": "build a navbar"})
    assert r.status_code == 200
    assert r.json()["result"] == "general_chat"


def test_architect_returns_plan_json():
    r = client.post("/architectFlow", json={"latestMessage": "todo app"})
    assert r.json()["result"] == {"title": "todo app", "steps": ["todo app"]}


def test_conductor_pipeline():
    r = client.post("/conductorFlow", json={"latestMessage": "todo app"})
    assert r.status_code == 200
    assert r.json()["result"] == "[ECHO RESPONSE]\ntodo app\n1. todo app"


def test_unknown_flow_404():
    assert client.post("/nopeFlow", json={"latestMessage": "x"}).status_code == 404


def test_blank_input_is_rejected():
    assert client.post("/generalChatFlow", json={"latestMessage": "  "}).status_code == 422
    assert client.post("/generalChatFlow", json={}).status_code == 422


def test_generation_failure_maps_to_502(monkeypatch):
    flow = GeneralChatFlow(ScriptedClient(GenerationFailure("upstream down")))
    monkeypatch.setitem(app_module.flows, "generalChatFlow", flow)

    r = client.post("/generalChatFlow", json={"latestMessage": "hi"})
    assert r.status_code == 502
    assert r.json()["detail"]["kind"] == "generation"
    assert r.json()["detail"]["flow"] == "generalChatFlow"


def test_invalid_structure_maps_to_422(monkeypatch):
    flow = ArchitectFlow(ScriptedClient("no json here"), app_module.prompt_store)
    monkeypatch.setitem(app_module.flows, "architectFlow", flow)

    r = client.post("/architectFlow", json={"latestMessage": "plan"})
    assert r.status_code == 422
    assert r.json()["detail"]["kind"] == "structured_output_invalid"
