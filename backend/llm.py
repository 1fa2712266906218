# file: backend/llm.py

import json
import logging
import random
from functools import lru_cache
from typing import Any, Dict, List, Optional

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_core.tools import tool
from langchain_openai import ChatOpenAI

from backend import config
from backend.aqi_utils import get_health_recommendations
from backend.cities import CITY_AIR_QUALITY, CITY_COORDS

TEMPERATURE = 0.7
ANALYSIS_MAX_TOKENS = 1000
CHAT_MAX_TOKENS = 2000
REQUEST_TIMEOUT = 30

CHAT_SYSTEM_PROMPT = (
    "You are an air quality expert assistant. You help users understand air pollution data, health impacts, "
    "and provide recommendations. Use the available tools to fetch real-time data and provide accurate insights."
)


def build_analysis_prompt(location: str, aqi: int, pollutants: Dict[str, Any]) -> str:
    return (
        "Analyze this air quality data and provide health insights:\n"
        f"Location: {location}\n"
        f"AQI: {aqi}\n"
        f"Pollutants: {json.dumps(pollutants, ensure_ascii=False)}\n"
        "\n"
        "Provide:\n"
        "1. Health risk assessment\n"
        "2. Recommended activities\n"
        "3. Vulnerable groups to watch\n"
        "4. Short-term forecast implications"
    )


def _lookup_city(location: str) -> Optional[str]:
    wanted = location.strip().lower()
    for code, coords in CITY_COORDS.items():
        if wanted in (code.lower(), str(coords["name"]).lower()):
            return code
    return None


@tool
def get_air_quality(location: str) -> Dict[str, Any]:
    """Get current air quality data for a specific location."""
    code = _lookup_city(location)
    if code:
        return {"location": location, **CITY_AIR_QUALITY[code]}
    # No baseline for this location, answer with sample values
    return {
        "location": location,
        "aqi": random.randint(0, 199),
        "pm25": random.randint(0, 99),
        "pm10": random.randint(0, 149),
        "no2": random.randint(0, 79),
        "o3": random.randint(0, 119),
        "so2": random.randint(0, 49),
        "co": random.randint(0, 999),
    }


@tool
def health_recommendations(aqi: float) -> Dict[str, Any]:
    """Get health recommendations based on an Air Quality Index value."""
    return get_health_recommendations(aqi)


@tool
def compare_pollutants(locations: List[str]) -> List[Dict[str, Any]]:
    """Compare pollutant levels across different locations."""
    comparison = []
    for location in locations:
        code = _lookup_city(location)
        aqi = CITY_AIR_QUALITY[code]["aqi"] if code else random.randint(0, 199)
        comparison.append({"location": location, "aqi": aqi,
                           "trend": "improving" if random.random() > 0.5 else "worsening"})
    return comparison


CHAT_TOOLS = [get_air_quality, health_recommendations, compare_pollutants]
TOOLS_BY_NAME = {chat_tool.name: chat_tool for chat_tool in CHAT_TOOLS}


def _message_text(message: AIMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    return "".join(part.get("text", "") if isinstance(part, dict) else str(part) for part in content)


def _to_langchain(message: Dict[str, str]):
    role, content = message["role"], message["content"]
    if role == "assistant":
        return AIMessage(content=content)
    if role == "system":
        return SystemMessage(content=content)
    return HumanMessage(content=content)


class LanguageModel:
    """Text completion and chat against a hosted model."""

    async def complete(self, prompt: str) -> str:
        raise NotImplementedError

    async def chat(self, messages: List[Dict[str, str]]) -> str:
        raise NotImplementedError


class OpenAIChatModel(LanguageModel):
    def __init__(self, api_key: str, model: str = config.LLM_MODEL):
        self.model = model
        self._analysis_llm = ChatOpenAI(model=model, api_key=api_key, temperature=TEMPERATURE,
                                        max_tokens=ANALYSIS_MAX_TOKENS, timeout=REQUEST_TIMEOUT, max_retries=0)
        self._chat_llm = ChatOpenAI(model=model, api_key=api_key, temperature=TEMPERATURE,
                                    max_tokens=CHAT_MAX_TOKENS, timeout=REQUEST_TIMEOUT,
                                    max_retries=0).bind_tools(CHAT_TOOLS)

    async def complete(self, prompt: str) -> str:
        response = await self._analysis_llm.ainvoke(prompt)
        return _message_text(response)

    async def chat(self, messages: List[Dict[str, str]]) -> str:
        """Answer the conversation, running one round of tool calls when the model asks for them."""
        history = [SystemMessage(content=CHAT_SYSTEM_PROMPT)] + [_to_langchain(m) for m in messages]
        response = await self._chat_llm.ainvoke(history)
        if not response.tool_calls:
            return _message_text(response)

        history.append(response)
        for call in response.tool_calls:
            chat_tool = TOOLS_BY_NAME.get(call["name"])
            if chat_tool is None:
                logging.warning(f"Model requested unknown tool {call['name']}")
                result: Any = {"error": f"Unknown tool {call['name']}"}
            else:
                result = chat_tool.invoke(call["args"])
            history.append(ToolMessage(content=json.dumps(result, ensure_ascii=False), tool_call_id=call["id"]))
        response = await self._chat_llm.ainvoke(history)
        return _message_text(response)


@lru_cache(maxsize=1)
def get_language_model() -> Optional[LanguageModel]:
    """Return the configured model, or None when no API key is set."""
    if not config.OPENAI_API_KEY:
        logging.warning("OPENAI_API_KEY not configured")
        return None
    return OpenAIChatModel(api_key=config.OPENAI_API_KEY)
