"""
Tests for the OpenAI agent worker step loop.
"""
import logging

import pytest

from agentcraft import (
    AgentConfigurationError,
    ChatMemoryBuffer,
    ChatMessage,
    MessageRole,
    OpenAIAgentWorker,
    StreamingNotSupportedError,
    Task,
)
from agentcraft.retriever import Retriever

from conftest import MockLLM, assistant, call


class StaticRetriever(Retriever):
    """Retriever returning a fixed list of tools."""

    tools: list = []

    async def _retrieve(self, query: str, top_k: int, **kwargs):
        return list(self.tools)


def make_worker(llm, tools=None, **kwargs):
    kwargs.setdefault("max_function_calls", 5)
    return OpenAIAgentWorker(tools=tools, llm=llm, **kwargs)


def make_task(text="sum 2 + 2?", memory=None):
    return Task(input=text, memory=memory if memory is not None else ChatMemoryBuffer())


@pytest.mark.asyncio
async def test_pure_chat_is_done_after_one_step():
    llm = MockLLM(responses=[assistant("Hello there")])
    worker = make_worker(llm)
    task = make_task("hi")

    step = worker.initialize_step(task)
    output = await worker.run_step(step, task)

    assert output.is_done
    assert output.next_steps == []
    assert str(output.output) == "Hello there"
    assert llm.requests[0]["tools"] is None
    assert task.state.n_function_calls == 0


@pytest.mark.asyncio
async def test_initialize_step_resets_state():
    worker = make_worker(MockLLM())
    task = make_task()
    task.state.n_function_calls = 3
    task.state.new_memory.put(ChatMessage.user_message("stale"))

    step = worker.initialize_step(task)

    assert step.task_id == task.task_id
    assert step.input == task.input
    assert task.state.n_function_calls == 0
    assert task.state.sources == []
    assert task.state.new_memory.get() == []


@pytest.mark.asyncio
async def test_tool_call_round_trip(add_tool):
    llm = MockLLM(responses=[
        assistant(None, call("add", '{"a": 2, "b": 2}')),
        assistant("2 + 2 = 4"),
    ])
    worker = make_worker(llm, tools=[add_tool])
    task = make_task()

    step = worker.initialize_step(task)
    first = await worker.run_step(step, task)

    assert not first.is_done
    assert len(first.next_steps) == 1
    next_step = first.next_steps[0]
    assert next_step.input is None
    assert next_step.task_id == task.task_id
    assert next_step.step_id != step.step_id
    assert task.state.n_function_calls == 1

    tool_message = task.state.new_memory.get()[-1]
    assert tool_message.role == MessageRole.TOOL
    assert tool_message.content == "4"
    assert tool_message.additional_kwargs == {"name": "add", "tool_call_id": "call_1"}
    assert [str(source) for source in task.state.sources] == ["4"]

    second = await worker.run_step(next_step, task)

    assert second.is_done
    assert str(second.output) == "2 + 2 = 4"
    assert [str(source) for source in second.output.sources] == ["4"]


@pytest.mark.asyncio
async def test_request_layout(add_tool):
    llm = MockLLM(responses=[assistant("ok")])
    history = ChatMemoryBuffer.from_messages([
        ChatMessage.user_message("earlier"),
        ChatMessage.assistant_message("reply"),
    ])
    worker = make_worker(llm, tools=[add_tool], prefix_messages=[ChatMessage.system_message("be brief")])
    task = make_task("now", memory=history)

    await worker.run_step(worker.initialize_step(task), task, tool_choice="required")

    request = llm.requests[0]
    assert [m.content for m in request["messages"]] == ["be brief", "earlier", "reply", "now"]
    assert request["tools"] == [add_tool.metadata.to_openai_tool()]
    assert request["tool_choice"] == "required"


@pytest.mark.asyncio
async def test_unknown_tool_is_recoverable(add_tool):
    llm = MockLLM(responses=[
        assistant(None, call("multiply", '{"a": 2, "b": 3}')),
        assistant("I cannot multiply"),
    ])
    worker = make_worker(llm, tools=[add_tool])
    task = make_task()

    first = await worker.run_step(worker.initialize_step(task), task)

    assert not first.is_done
    assert task.state.sources[0].is_error
    assert task.state.new_memory.get()[-1].content == "Tool with name multiply not found"

    second = await worker.run_step(first.next_steps[0], task)
    assert second.is_done
    # The LLM saw the error message on the second request
    assert llm.requests[1]["messages"][-1].content == "Tool with name multiply not found"


@pytest.mark.asyncio
async def test_malformed_arguments_are_recoverable(add_tool):
    llm = MockLLM(responses=[assistant(None, call("add", "{not json"))])
    worker = make_worker(llm, tools=[add_tool])
    task = make_task()

    output = await worker.run_step(worker.initialize_step(task), task)

    assert not output.is_done
    assert task.state.sources[0].is_error
    assert task.state.n_function_calls == 1


@pytest.mark.asyncio
async def test_every_call_in_a_batch_is_dispatched(add_tool):
    llm = MockLLM(responses=[
        assistant(None, call("add", '{"a": 1, "b": 1}', "c1"), call("add", '{"a": 2, "b": 2}', "c2")),
    ])
    worker = make_worker(llm, tools=[add_tool])
    task = make_task()

    await worker.run_step(worker.initialize_step(task), task)

    tool_messages = [m for m in task.state.new_memory.get() if m.role == MessageRole.TOOL]
    assert [m.content for m in tool_messages] == ["2", "4"]
    assert [m.additional_kwargs["tool_call_id"] for m in tool_messages] == ["c1", "c2"]
    assert task.state.n_function_calls == 2


@pytest.mark.asyncio
async def test_function_call_limit_is_never_exceeded(add_tool):
    tool_reply = assistant(None, call("add", '{"a": 1, "b": 1}'))
    llm = MockLLM(responses=[tool_reply] * 5)
    worker = make_worker(llm, tools=[add_tool], max_function_calls=2)
    task = make_task()

    step = worker.initialize_step(task)
    outputs = []
    while True:
        output = await worker.run_step(step, task)
        outputs.append(output)
        if output.is_done:
            break
        step = output.next_steps[0]

    assert len(outputs) == 3
    assert outputs[-1].next_steps == []
    assert task.state.n_function_calls == 2
    executed = [s for s in task.state.sources if not s.is_error]
    assert len(executed) == 2
    # The refused call is still answered in memory
    last = task.state.new_memory.get()[-1]
    assert last.role == MessageRole.TOOL
    assert "Function call limit of 2 reached" in last.content


@pytest.mark.asyncio
async def test_batch_that_would_exceed_limit_is_not_started(add_tool):
    llm = MockLLM(responses=[
        assistant(None, *[call("add", '{"a": 1, "b": 1}', f"c{i}") for i in range(3)]),
    ])
    worker = make_worker(llm, tools=[add_tool], max_function_calls=2)
    task = make_task()

    output = await worker.run_step(worker.initialize_step(task), task)

    assert output.is_done
    assert task.state.n_function_calls == 0
    assert len(task.state.sources) == 3
    assert all(source.is_error for source in task.state.sources)


@pytest.mark.asyncio
async def test_finalize_task_appends_scratch_memory():
    llm = MockLLM(responses=[assistant("done")])
    persistent = ChatMemoryBuffer.from_messages([ChatMessage.user_message("old")])
    worker = make_worker(llm)
    task = make_task("new", memory=persistent)

    await worker.run_step(worker.initialize_step(task), task)
    before = persistent.get()
    scratch = task.state.new_memory.get()

    worker.finalize_task(task)

    assert persistent.get() == before + scratch
    assert task.state.new_memory.get() == []

    # A second call adds nothing
    worker.finalize_task(task)
    assert persistent.get() == before + scratch


@pytest.mark.asyncio
async def test_stream_step_is_not_supported():
    llm = MockLLM(responses=[assistant("never")])
    worker = make_worker(llm)
    task = make_task()

    with pytest.raises(StreamingNotSupportedError):
        await worker.stream_step(worker.initialize_step(task), task)
    assert llm.requests == []


def test_tools_and_retriever_are_exclusive(add_tool):
    with pytest.raises(AgentConfigurationError):
        OpenAIAgentWorker(tools=[add_tool], tool_retriever=StaticRetriever(), llm=MockLLM())


@pytest.mark.asyncio
async def test_tools_come_from_retriever(add_tool):
    llm = MockLLM(responses=[assistant("ok")])
    worker = OpenAIAgentWorker(tool_retriever=StaticRetriever(tools=[add_tool]), llm=llm, max_function_calls=5)
    task = make_task()

    await worker.run_step(worker.initialize_step(task), task)

    assert llm.requests[0]["tools"] == [add_tool.metadata.to_openai_tool()]
    assert llm.requests[0]["tool_choice"] == "auto"


def test_empty_tool_list_with_retriever_is_allowed():
    worker = OpenAIAgentWorker(tools=[], tool_retriever=StaticRetriever(), llm=MockLLM())

    assert worker.max_function_calls >= 0


def test_verbose_worker_leaves_handlers_alone():
    logger = logging.getLogger("agentcraft")
    handlers = list(logger.handlers)
    level = logger.level

    OpenAIAgentWorker(llm=MockLLM(), verbose=True, max_function_calls=5)

    assert logger.handlers == handlers
    assert logger.level == level


@pytest.mark.asyncio
async def test_verbose_logs_function_calls_at_info(add_tool, caplog):
    llm = MockLLM(responses=[assistant(None, call("add", '{"a": 2, "b": 2}')), assistant("4")])
    worker = make_worker(llm, tools=[add_tool], verbose=True)
    task = make_task()

    with caplog.at_level(logging.INFO, logger="agentcraft"):
        await worker.run_step(worker.initialize_step(task), task)

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert "=== Calling Function ===" in messages
    assert "Calling function: add with args: {\"a\": 2, \"b\": 2}" in messages
