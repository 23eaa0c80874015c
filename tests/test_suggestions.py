"""Tests for the Gemini suggestion service"""
from unittest.mock import MagicMock

import pytest

from melbgo.tools import gemini_suggestions
from melbgo.tools.gemini_suggestions import EMPTY_PLACEHOLDER, FAILURE_PLACEHOLDER, SuggestionService


@pytest.fixture
def model(monkeypatch):
    model = MagicMock()
    monkeypatch.setattr(gemini_suggestions.genai, "configure", MagicMock())
    monkeypatch.setattr(gemini_suggestions.genai, "GenerativeModel", MagicMock(return_value=model))
    return model


async def test_missing_key_returns_placeholder(model):
    service = SuggestionService(api_key="")
    assert await service.suggest("Lorne") == FAILURE_PLACEHOLDER
    model.generate_content.assert_not_called()


async def test_returns_model_text(model):
    model.generate_content.return_value = MagicMock(text="  Try the fish and chips on the pier.  ")
    service = SuggestionService(api_key="key", model_name="gemini-test")

    assert await service.suggest("Lorne", "lunch") == "Try the fish and chips on the pier."
    prompt = model.generate_content.call_args.args[0]
    assert "Lorne" in prompt
    assert "lunch" in prompt
    gemini_suggestions.genai.GenerativeModel.assert_called_once_with(model_name="gemini-test")


async def test_api_failure_returns_placeholder(model, caplog):
    model.generate_content.side_effect = RuntimeError("quota exceeded")
    service = SuggestionService(api_key="key")

    assert await service.suggest("Apollo Bay") == FAILURE_PLACEHOLDER
    assert "Gemini API Error" in caplog.text


async def test_empty_answer(model):
    model.generate_content.return_value = MagicMock(text="")
    service = SuggestionService(api_key="key")
    assert await service.suggest("Torquay") == EMPTY_PLACEHOLDER
