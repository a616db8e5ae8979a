"""
Tests for the Gemini collaborator with the google.generativeai client mocked out
"""

import json

import pytest
from unittest.mock import AsyncMock, Mock, patch

from interneval.config import Settings
from interneval.constants import ERROR_API_KEY_MISSING, ERROR_PARSE_EVALUATION, ERROR_TEMPLATE_GENERATION
from interneval.models.evaluation import CriteriaType
from interneval.models.state import ErrorKind
from interneval.prompts.evaluation_parsing import PARSE_RESPONSE_SCHEMA
from interneval.prompts.template_generation import TEMPLATE_RESPONSE_SCHEMA, get_template_prompt
from interneval.services.exceptions import AcquisitionError, MissingCredentialError, TemplateError
from interneval.services.gemini_service import GeminiServices


def _response(text):
    response = Mock()
    response.parts = [Mock()] if text else []
    response.text = text
    return response


@pytest.fixture
def mock_genai():
    with patch("interneval.services.gemini_service.genai") as genai:
        model = Mock()
        model.generate_content_async = AsyncMock()
        genai.GenerativeModel.return_value = model
        yield genai


@pytest.fixture
def service():
    return GeminiServices(settings=Settings(gemini_api_key="test-key", gemini_model="gemini-test"))


def _set_reply(mock_genai, text):
    mock_genai.GenerativeModel.return_value.generate_content_async.return_value = _response(text)


class TestCreateCriteriaTemplate:

    @pytest.mark.asyncio
    async def test_returns_strength_criteria_scored_zero(self, service, mock_genai):
        _set_reply(mock_genai, json.dumps({"criteria": [
            {"id": "c1", "text": "Kỹ năng Java", "type": "WEAKNESS", "score": 3},
            {"id": "c2", "text": " Thái độ làm việc ", "type": "strength", "score": "0"},
        ]}))

        criteria = await service.create_criteria_template("Điểm mạnh: ...")

        assert [c.id for c in criteria] == ["c1", "c2"]
        assert [c.text for c in criteria] == ["Kỹ năng Java", "Thái độ làm việc"]
        assert all(c.type == CriteriaType.STRENGTH for c in criteria)
        assert all(c.score == 0 for c in criteria)

        mock_genai.configure.assert_called_once_with(api_key="test-key")
        args, kwargs = mock_genai.GenerativeModel.call_args
        assert args[0] == "gemini-test"
        prompt = mock_genai.GenerativeModel.return_value.generate_content_async.call_args.args[0]
        assert "Reference Data:" in prompt
        assert "Điểm mạnh: ..." in prompt
        config = mock_genai.GenerativeModel.return_value.generate_content_async.call_args.kwargs["generation_config"]
        assert config["response_mime_type"] == "application/json"

    @pytest.mark.asyncio
    async def test_response_schema_allows_only_strength(self, service, mock_genai):
        _set_reply(mock_genai, '{"criteria": []}')

        await service.create_criteria_template("notes")

        config = mock_genai.GenerativeModel.return_value.generate_content_async.call_args.kwargs["generation_config"]
        schema = config["response_schema"]
        item = schema["properties"]["criteria"]["items"]
        assert item["properties"]["type"]["enum"] == ["STRENGTH"]
        assert item["required"] == ["id", "text", "type", "score"]
        assert schema == TEMPLATE_RESPONSE_SCHEMA
        assert schema is not TEMPLATE_RESPONSE_SCHEMA

    def test_template_prompt_is_not_indented(self):
        prompt = get_template_prompt("Điểm mạnh: ...")

        assert "\nReference Data:\n" in prompt
        assert "\n    " not in prompt

    @pytest.mark.asyncio
    async def test_code_fenced_json_is_cleaned(self, service, mock_genai):
        _set_reply(mock_genai, '```json\n{"criteria": [{"id": "c1", "text": "Java", "type": "STRENGTH", "score": 0},]}\n```')

        criteria = await service.create_criteria_template("notes")

        assert [c.text for c in criteria] == ["Java"]

    @pytest.mark.asyncio
    async def test_empty_list_is_returned_as_is(self, service, mock_genai):
        _set_reply(mock_genai, '{"criteria": []}')
        assert await service.create_criteria_template("notes") == []

    @pytest.mark.asyncio
    async def test_missing_api_key(self, mock_genai):
        service = GeminiServices(settings=Settings(gemini_api_key=None))

        with pytest.raises(MissingCredentialError) as exc_info:
            await service.create_criteria_template("notes")

        assert str(exc_info.value) == ERROR_API_KEY_MISSING
        mock_genai.GenerativeModel.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_response(self, service, mock_genai):
        _set_reply(mock_genai, "")

        with pytest.raises(AcquisitionError) as exc_info:
            await service.create_criteria_template("notes")

        assert exc_info.value.message == ERROR_TEMPLATE_GENERATION

    @pytest.mark.asyncio
    async def test_unparseable_response(self, service, mock_genai):
        _set_reply(mock_genai, "I cannot help with that.")

        with pytest.raises(AcquisitionError):
            await service.create_criteria_template("notes")

    @pytest.mark.asyncio
    async def test_service_error(self, service, mock_genai):
        mock_genai.GenerativeModel.return_value.generate_content_async.side_effect = RuntimeError("503")

        with pytest.raises(AcquisitionError) as exc_info:
            await service.create_criteria_template("notes")

        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestParseRawEvaluations:

    @pytest.mark.asyncio
    async def test_parses_candidates(self, service, mock_genai):
        _set_reply(mock_genai, json.dumps({"candidates": [{
            "id": "cand-1",
            "name": "Nam",
            "positionRecommendation": "Cần đào tạo thêm về kiểm soát chất lượng",
            "criteria": [
                {"id": "s1", "text": "Nhiệt huyết", "type": "STRENGTH", "score": 0},
                {"id": "w1", "text": "Thiếu cẩn trọng", "type": "WEAKNESS", "score": 0},
            ],
        }]}, ensure_ascii=False))

        candidates = await service.parse_raw_evaluations("Nam ... Điểm yếu ...")

        assert len(candidates) == 1
        assert candidates[0].name == "Nam"
        assert candidates[0].position_recommendation.startswith("Cần đào tạo")
        assert [c.type for c in candidates[0].criteria] == [CriteriaType.STRENGTH, CriteriaType.WEAKNESS]

        kwargs = mock_genai.GenerativeModel.call_args.kwargs
        assert "data extraction engine" in kwargs["system_instruction"]

        config = mock_genai.GenerativeModel.return_value.generate_content_async.call_args.kwargs["generation_config"]
        schema = config["response_schema"]
        criterion = schema["properties"]["candidates"]["items"]["properties"]["criteria"]["items"]
        assert criterion["properties"]["type"]["enum"] == ["STRENGTH", "WEAKNESS"]
        assert schema == PARSE_RESPONSE_SCHEMA
        assert schema is not PARSE_RESPONSE_SCHEMA

    @pytest.mark.asyncio
    async def test_parse_failure(self, service, mock_genai):
        _set_reply(mock_genai, '{"candidates": [{"name": "no id"}]}')

        with pytest.raises(AcquisitionError) as exc_info:
            await service.parse_raw_evaluations("notes")

        assert exc_info.value.message == ERROR_PARSE_EVALUATION


def test_api_key_read_at_call_time(monkeypatch):
    service = GeminiServices()

    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    with pytest.raises(MissingCredentialError):
        service._require_api_key(service.settings)

    monkeypatch.setenv("API_KEY", "from-env")
    assert service._require_api_key(service.settings) == "from-env"


def test_template_error_defaults_to_acquisition_failure():
    assert TemplateError().kind == ErrorKind.ACQUISITION_FAILURE
    assert TemplateError("x", kind=ErrorKind.EMPTY_TEMPLATE).kind == ErrorKind.EMPTY_TEMPLATE
    assert MissingCredentialError().kind == ErrorKind.MISSING_CREDENTIAL
