import pytest
from pydantic_ai.messages import (
    ModelRequest,
    ModelResponse,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
    UserPromptPart,
)
from pydantic_ai.models.function import FunctionModel

from local_places.core.constants import FALLBACK_RESPONSE
from local_places.core.errors import MSG_AI_QUOTA_EXCEEDED, OracleError
from local_places.orchestrator.orchestrator import run
from local_places.services import place_service


def _tool_returns(message) -> list[ToolReturnPart]:
    if not isinstance(message, ModelRequest):
        return []
    return [p for p in message.parts if isinstance(p, ToolReturnPart)]


@pytest.mark.asyncio
async def test_single_tool_call_executes_once_and_feeds_back(db, seeded, store, monkeypatch):
    calls = []
    original = place_service.search_places

    def counting_search(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(place_service, "search_places", counting_search)
    seen_results = []

    def model_fn(messages, info):
        returns = _tool_returns(messages[-1])
        if returns:
            seen_results.extend(r.content for r in returns)
            names = ", ".join(d["name"] for d in returns[0].content["data"])
            return ModelResponse(parts=[TextPart(content=f"Parks: {names}")])
        assert {t.name for t in info.function_tools} >= {"search_places", "add_place"}
        return ModelResponse(
            parts=[ToolCallPart(tool_name="search_places", args={"category": "park"}, tool_call_id="call-1")]
        )

    session = store.get_or_create()
    text = await run("Show me all parks", db, session=session, model=FunctionModel(model_fn))

    assert text == "Parks: Lincoln Park, Prospect Park"
    assert len(calls) == 1
    assert seen_results[0]["success"] is True
    assert seen_results[0]["count"] == 2
    assert len(seen_results[0]["data"]) == 2


@pytest.mark.asyncio
async def test_every_tool_call_in_a_round_is_answered(db, seeded, store):
    rounds = []

    def model_fn(messages, info):
        returns = _tool_returns(messages[-1])
        if returns:
            rounds.append(returns)
            return ModelResponse(parts=[TextPart(content="done")])
        return ModelResponse(
            parts=[
                ToolCallPart(tool_name="search_by_name", args={"search_term": "park"}, tool_call_id="a"),
                ToolCallPart(tool_name="get_statistics", args={"category": "cafe"}, tool_call_id="b"),
            ]
        )

    text = await run("Parks and cafe stats", db, session=store.get_or_create(), model=FunctionModel(model_fn))

    assert text == "done"
    assert len(rounds) == 1
    assert [(r.tool_call_id, r.tool_name) for r in rounds[0]] == [("a", "search_by_name"), ("b", "get_statistics")]
    assert rounds[0][0].content["count"] == 2
    assert rounds[0][1].content["data"][0]["count"] == 2


@pytest.mark.asyncio
async def test_tool_failures_are_fed_back_not_raised(db, store):
    seen = []

    def model_fn(messages, info):
        returns = _tool_returns(messages[-1])
        if returns:
            seen.extend(r.content for r in returns)
            return ModelResponse(parts=[TextPart(content="Sorry, that did not work.")])
        return ModelResponse(
            parts=[
                ToolCallPart(tool_name="drop_table", args={}, tool_call_id="x"),
                ToolCallPart(tool_name="get_place_details", args={"id": "abc"}, tool_call_id="y"),
            ]
        )

    text = await run("Break things", db, session=store.get_or_create(), model=FunctionModel(model_fn))

    assert text == "Sorry, that did not work."
    assert [s["error"] for s in seen] == ["unknown_operation", "invalid_arguments"]
    assert all(s["success"] is False for s in seen)


@pytest.mark.asyncio
async def test_empty_final_text_returns_fallback(db, store):
    def model_fn(messages, info):
        return ModelResponse(parts=[TextPart(content="   ")])

    session = store.get_or_create()
    text = await run("Hello?", db, session=session, model=FunctionModel(model_fn))

    assert text == FALLBACK_RESPONSE
    assert session.turns == []


@pytest.mark.asyncio
async def test_transcript_is_sent_on_the_next_turn(db, store):
    prompts = []

    def model_fn(messages, info):
        prompts.append(
            [p.content for m in messages if isinstance(m, ModelRequest) for p in m.parts if isinstance(p, UserPromptPart)]
        )
        return ModelResponse(parts=[TextPart(content=f"answer {len(prompts)}")])

    session = store.get_or_create("s1")
    model = FunctionModel(model_fn)
    assert await run("first question", db, session=session, model=model) == "answer 1"
    assert await run("second question", db, session=session, model=model) == "answer 2"

    assert prompts[1] == ["first question", "second question"]
    assert [(t.role, t.text) for t in session.turns] == [
        ("user", "first question"),
        ("model", "answer 1"),
        ("user", "second question"),
        ("model", "answer 2"),
    ]


@pytest.mark.asyncio
async def test_runaway_tool_loop_raises_oracle_error(db, seeded, store):
    def model_fn(messages, info):
        n = len(messages)
        return ModelResponse(
            parts=[ToolCallPart(tool_name="get_statistics", args={}, tool_call_id=f"call-{n}")]
        )

    session = store.get_or_create()
    with pytest.raises(OracleError):
        await run("Loop forever", db, session=session, model=FunctionModel(model_fn), max_rounds=3)
    assert session.turns == []


@pytest.mark.asyncio
@pytest.mark.parametrize("max_rounds", [1, 2])
async def test_round_cap_leaves_last_round_calls_unexecuted(db, store, max_rounds):
    def model_fn(messages, info):
        n = len(messages)
        return ModelResponse(
            parts=[
                ToolCallPart(
                    tool_name="add_place",
                    args={"name": f"Ghost {n}", "category": "cafe", "latitude": 1.0, "longitude": 1.0},
                    tool_call_id=f"add-{n}",
                )
            ]
        )

    with pytest.raises(OracleError):
        await run("Keep adding", db, session=store.get_or_create(), model=FunctionModel(model_fn), max_rounds=max_rounds)
    # every executed call had its result fed back to the model
    assert len(place_service.get_all_places(db)) == max_rounds - 1


@pytest.mark.asyncio
async def test_model_exception_becomes_oracle_error(db, store):
    def model_fn(messages, info):
        raise RuntimeError("upstream exploded")

    with pytest.raises(OracleError) as exc_info:
        await run("Hi", db, session=store.get_or_create(), model=FunctionModel(model_fn))
    assert exc_info.value.detail == "upstream exploded"
    assert exc_info.value.category == "oracle_failure"


@pytest.mark.asyncio
async def test_quota_error_gets_friendly_detail(db, store):
    def model_fn(messages, info):
        raise RuntimeError("429 RESOURCE_EXHAUSTED: quota exceeded")

    with pytest.raises(OracleError) as exc_info:
        await run("Hi", db, session=store.get_or_create(), model=FunctionModel(model_fn))
    assert exc_info.value.detail == MSG_AI_QUOTA_EXCEEDED
