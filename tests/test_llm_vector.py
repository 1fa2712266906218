"""Language model tools and chat loop, vector metadata and similarity search, with fake clients."""

import asyncio
from types import SimpleNamespace

import pytest
from langchain_core.messages import AIMessage, ToolMessage

from backend.llm import (
    OpenAIChatModel,
    build_analysis_prompt,
    compare_pollutants,
    get_air_quality,
    health_recommendations,
)
from backend.models import PollutantLevels, VectorMetadata
from backend.vector_search import VectorSearchService, flatten_metadata, unflatten_metadata


class ScriptedChatModel:
    """Replays canned responses and records what it was sent."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(list(messages) if isinstance(messages, list) else messages)
        return self.responses.pop(0)


class FakeEmbeddings:
    def __init__(self):
        self.texts = []

    async def aembed_query(self, text):
        self.texts.append(text)
        return [0.1, 0.2, 0.3]


class FakeIndex:
    def __init__(self, matches=()):
        self.matches = list(matches)
        self.upserts = []
        self.queries = []

    def upsert(self, vectors):
        self.upserts.extend(vectors)

    def query(self, vector, top_k, include_metadata):
        self.queries.append((vector, top_k, include_metadata))
        return SimpleNamespace(matches=self.matches)


@pytest.fixture
def chat_model():
    return OpenAIChatModel(api_key="test-key", model="gpt-test")


class TestPromptAndTools:

    def test_analysis_prompt(self):
        prompt = build_analysis_prompt("Los Angeles", 75, {"pm25": 18.5})
        assert "Location: Los Angeles" in prompt
        assert "AQI: 75" in prompt
        assert '"pm25": 18.5' in prompt
        assert "4. Short-term forecast implications" in prompt

    def test_known_city_uses_baseline(self):
        result = get_air_quality.invoke({"location": "New York City"})
        assert result["aqi"] == 58
        assert result["pm25"] == 13.2

    def test_unknown_city_gets_sample_values(self):
        result = get_air_quality.invoke({"location": "Atlantis"})
        assert result["location"] == "Atlantis"
        assert 0 <= result["aqi"] < 200

    def test_health_recommendations(self):
        assert health_recommendations.invoke({"aqi": 30})["level"] == "Good"
        assert health_recommendations.invoke({"aqi": 180})["level"] == "Unhealthy"

    def test_compare_pollutants(self):
        result = compare_pollutants.invoke({"locations": ["LA", "Springfield"]})
        assert [entry["location"] for entry in result] == ["LA", "Springfield"]
        assert result[0]["aqi"] == 75
        assert {entry["trend"] for entry in result} <= {"improving", "worsening"}


class TestChatModel:

    def test_complete(self, chat_model):
        chat_model._analysis_llm = ScriptedChatModel(AIMessage(content="Moderate risk."))
        assert asyncio.run(chat_model.complete("prompt")) == "Moderate risk."

    def test_chat_without_tools(self, chat_model):
        chat_model._chat_llm = ScriptedChatModel(AIMessage(content="Hello!"))
        reply = asyncio.run(chat_model.chat([{"role": "user", "content": "hi"}]))
        assert reply == "Hello!"
        assert chat_model._chat_llm.calls[0][0].content.startswith("You are an air quality expert assistant")

    def test_chat_runs_one_tool_round(self, chat_model):
        tool_request = AIMessage(content="", tool_calls=[
            {"name": "health_recommendations", "args": {"aqi": 160}, "id": "call_1"},
        ])
        scripted = ScriptedChatModel(tool_request, AIMessage(content="Stay indoors."))
        chat_model._chat_llm = scripted

        reply = asyncio.run(chat_model.chat([{"role": "user", "content": "Is AQI 160 bad?"}]))

        assert reply == "Stay indoors."
        tool_message = scripted.calls[1][-1]
        assert isinstance(tool_message, ToolMessage)
        assert tool_message.tool_call_id == "call_1"
        assert "Use air purifiers" in tool_message.content

    def test_unknown_tool_is_reported_to_model(self, chat_model):
        tool_request = AIMessage(content="", tool_calls=[{"name": "launch_rocket", "args": {}, "id": "call_9"}])
        scripted = ScriptedChatModel(tool_request, AIMessage(content="Sorry."))
        chat_model._chat_llm = scripted

        assert asyncio.run(chat_model.chat([{"role": "user", "content": "go"}])) == "Sorry."
        assert "Unknown tool launch_rocket" in scripted.calls[1][-1].content


class TestVectorSearch:

    def metadata(self):
        return VectorMetadata(location="Los Angeles", timestamp="2025-10-05T12:00:00+00:00", aqi=75,
                              pollutants=PollutantLevels(pm25=18.5, o3=68))

    def test_flatten_skips_missing_pollutants(self):
        flat = flatten_metadata(self.metadata())
        assert flat == {"location": "Los Angeles", "timestamp": "2025-10-05T12:00:00+00:00", "aqi": 75,
                        "pollutant_pm25": 18.5, "pollutant_o3": 68}

    def test_unflatten_restores_pollutants(self):
        restored = unflatten_metadata({"location": "NYC", "timestamp": "t", "aqi": 58.0, "pollutant_no2": 19})
        assert restored.aqi == 58
        assert restored.pollutants.no2 == 19
        assert restored.pollutants.pm25 is None

    def test_not_configured_without_credentials(self):
        service = VectorSearchService(api_key=None, openai_api_key="key")
        assert asyncio.run(service.initialize()) is False

    def test_index_reading(self):
        service = VectorSearchService(api_key="pc", openai_api_key="oa")
        service._index, service._embeddings = FakeIndex(), FakeEmbeddings()

        asyncio.run(service.index_reading("la-1", self.metadata()))

        assert service._embeddings.texts == ["Air quality data for Los Angeles: AQI 75"]
        record = service._index.upserts[0]
        assert record["id"] == "la-1"
        assert record["values"] == [0.1, 0.2, 0.3]
        assert record["metadata"]["pollutant_pm25"] == 18.5

    def test_find_similar_patterns(self):
        match = SimpleNamespace(id="la-0", score=0.93, metadata=flatten_metadata(self.metadata()))
        service = VectorSearchService(api_key="pc", openai_api_key="oa")
        service._index, service._embeddings = FakeIndex([match]), FakeEmbeddings()

        results = asyncio.run(service.find_similar_patterns("Los Angeles", self.metadata()))

        assert service._embeddings.texts == ["Air quality in Los Angeles: AQI 75, PM2.5 18.5"]
        assert service._index.queries[0][1:] == (5, True)
        assert results[0].id == "la-0"
        assert results[0].metadata.pollutants.o3 == 68
