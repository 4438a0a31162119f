import pytest

from vibe_engine.flows import ChatTurn
from vibe_engine.generate import GenerationConfig, Message, build_messages


def test_history_first_then_newest_user_turn():
    history = [ChatTurn(role="user", content="hi"), ChatTurn(role="model", content="hello")]
    msgs = build_messages("what next?", history=history, system="SYS")

    assert [(m.role, m.text) for m in msgs] == [
        ("system", "SYS"),
        ("user", "hi"),
        ("model", "hello"),
        ("user", "what next?"),
    ]


def test_assembly_is_deterministic():
    history = [ChatTurn(role="user", content="a"), ChatTurn(role="model", content="b")]
    assert build_messages("c", history=history) == build_messages("c", history=history)


def test_no_system_message_without_persona():
    msgs = build_messages("only me")
    assert msgs == [Message(role="user", text="only me")]


def test_history_is_not_mutated():
    history = [ChatTurn(role="user", content="a")]
    build_messages("b", history=history)
    assert len(history) == 1


@pytest.mark.parametrize("latest", ["", "   "])
def test_blank_latest_message_rejected(latest):
    with pytest.raises(ValueError):
        build_messages(latest)


def test_unknown_role_rejected():
    with pytest.raises(ValueError):
        Message(role="assistant", text="x")


@pytest.mark.parametrize("temperature", [-0.1, 1.5])
def test_temperature_bounds(temperature):
    with pytest.raises(ValueError):
        GenerationConfig(temperature=temperature)


def test_config_is_immutable():
    cfg = GenerationConfig(temperature=0.2)
    with pytest.raises(Exception):
        cfg.temperature = 0.9
