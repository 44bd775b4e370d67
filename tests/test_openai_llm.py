"""
Tests for the OpenAI chat and embedding adapters, using fake async clients.
"""
from types import SimpleNamespace

import pytest

from agentcraft import ChatMessage, MessageRole, OpenAI, OpenAIEmbeddings, ToolCall
from agentcraft.llm.openai import from_openai_message, strip_thinking, to_openai_message
from agentcraft.settings import AgentcraftSettings


class FakeCompletions:
    def __init__(self, message):
        self.message = message
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        return SimpleNamespace(choices=[SimpleNamespace(message=self.message)])


def fake_client(message):
    completions = FakeCompletions(message)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def wire_tool_call(call_id, name, arguments):
    return SimpleNamespace(id=call_id, type="function", function=SimpleNamespace(name=name, arguments=arguments))


def test_strip_thinking():
    assert strip_thinking("<think>pondering\nmore</think>\n\nFinal answer") == "Final answer"
    assert strip_thinking("No reasoning here") == "No reasoning here"
    assert strip_thinking(None) is None


def test_to_openai_message_formats():
    call = ToolCall(id="call_1", name="add", arguments='{"a": 1}')

    assert to_openai_message(ChatMessage.user_message("hi")) == {"role": "user", "content": "hi"}
    assert to_openai_message(ChatMessage.assistant_message(None, tool_calls=[call])) == {
        "role": "assistant",
        "content": None,
        "tool_calls": [
            {"id": "call_1", "type": "function", "function": {"name": "add", "arguments": '{"a": 1}'}},
        ],
    }
    assert to_openai_message(ChatMessage.tool_message("2", name="add", tool_call_id="call_1")) == {
        "role": "tool",
        "content": "2",
        "tool_call_id": "call_1",
    }


def test_from_openai_message_parses_tool_calls():
    wire = SimpleNamespace(content=None, tool_calls=[wire_tool_call("c1", "add", '{"a": 1, "b": 2}')])

    message = from_openai_message(wire)

    assert message.role == MessageRole.ASSISTANT
    assert message.tool_calls == [ToolCall(id="c1", name="add", arguments='{"a": 1, "b": 2}')]


def test_from_openai_message_without_tool_calls():
    message = from_openai_message(SimpleNamespace(content="<think>x</think>Hello"))

    assert message.content == "Hello"
    assert message.tool_calls == []


@pytest.mark.asyncio
async def test_chat_sends_tools_and_choice():
    client, completions = fake_client(SimpleNamespace(content="4", tool_calls=None))
    llm = OpenAI(model="test-model", aclient=client, temperature=0.0)
    tools = [{"type": "function", "function": {"name": "add", "description": "Add", "parameters": {}}}]

    response = await llm.chat([ChatMessage.user_message("2 + 2?")], tools=tools, tool_choice="required")

    assert response.message.content == "4"
    request = completions.requests[0]
    assert request["model"] == "test-model"
    assert request["temperature"] == 0.0
    assert request["messages"] == [{"role": "user", "content": "2 + 2?"}]
    assert request["tools"] == tools
    assert request["tool_choice"] == "required"


@pytest.mark.asyncio
async def test_chat_without_tools_omits_tool_fields():
    client, completions = fake_client(SimpleNamespace(content="hello", tool_calls=None))
    llm = OpenAI(aclient=client)

    await llm.chat([ChatMessage.user_message("hi")])

    assert "tools" not in completions.requests[0]
    assert "tool_choice" not in completions.requests[0]


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr("agentcraft.llm.openai.get_settings", lambda: _settings_without_key())

    with pytest.raises(ValueError):
        OpenAI()


def _settings_without_key():
    return AgentcraftSettings(openai_api_key=None, _env_file=None)


class FakeEmbeddingsEndpoint:
    def __init__(self):
        self.inputs = []

    async def create(self, input, model):
        self.inputs.append(input)
        return SimpleNamespace(data=[SimpleNamespace(embedding=[float(len(input)), 1.0])])


@pytest.mark.asyncio
async def test_openai_embeddings_keep_input_order():
    endpoint = FakeEmbeddingsEndpoint()
    embeddings = OpenAIEmbeddings(model="embed-test", aclient=SimpleNamespace(embeddings=endpoint))

    vectors = await embeddings.embed_documents(["a", "bbb", "cc"])

    assert vectors == [[1.0, 1.0], [3.0, 1.0], [2.0, 1.0]]
    assert sorted(endpoint.inputs) == ["a", "bbb", "cc"]
    assert await embeddings.embed_documents([]) == []
    assert await embeddings.embed_query("dddd") == [4.0, 1.0]
