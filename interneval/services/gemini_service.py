import copy
import google.generativeai as genai
import logging
from typing import Any, Dict, List, Optional
from interneval.config import Settings, get_settings
from interneval.constants import ERROR_NO_AI_RESPONSE, ERROR_PARSE_EVALUATION, ERROR_TEMPLATE_GENERATION
from interneval.models.evaluation import (
    CandidateEvaluation,
    CriteriaType,
    EvaluationCriteria,
    ParseResponse,
    TemplateResponse,
)
from interneval.prompts.evaluation_parsing import (
    PARSE_RESPONSE_SCHEMA,
    PARSE_SYSTEM_INSTRUCTION,
    get_parse_evaluation_prompt,
)
from interneval.prompts.template_generation import (
    TEMPLATE_RESPONSE_SCHEMA,
    TEMPLATE_SYSTEM_INSTRUCTION,
    get_template_prompt,
)
from interneval.services.exceptions import AcquisitionError, MissingCredentialError
from interneval.utils.validator import clean_json_string, validate_json_response


class GeminiServices:
    """Gemini API service"""

    def __init__(self, settings: Optional[Settings] = None):
        # Without explicit settings the environment is read again on every call
        self._settings = settings

        self.safety_settings = [
            {
                "category": "HARM_CATEGORY_HARASSMENT",
                "threshold": "BLOCK_NONE"
            },
            {
                "category": "HARM_CATEGORY_HATE_SPEECH",
                "threshold": "BLOCK_NONE"
            },
            {
                "category": "HARM_CATEGORY_SEXUALLY_EXPLICIT",
                "threshold": "BLOCK_NONE"
            },
            {
                "category": "HARM_CATEGORY_DANGEROUS_CONTENT",
                "threshold": "BLOCK_NONE"
            }
        ]

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def _require_api_key(self, settings: Settings) -> str:
        if not settings.gemini_api_key:
            logging.error("Gemini API key is not configured")
            raise MissingCredentialError()
        return settings.gemini_api_key

    def _generation_config(
        self,
        settings: Settings,
        temperature: Optional[float],
        response_schema: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        config = {
            "temperature": settings.gemini_temperature if temperature is None else temperature,
            "top_p": 0.95,
            "top_k": 40,
            "max_output_tokens": settings.gemini_max_tokens,
            "response_mime_type": "application/json",
        }
        if response_schema is not None:
            # The client rewrites schema dicts while converting them
            config["response_schema"] = copy.deepcopy(response_schema)
        return config

    async def generate_json(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: Optional[float] = None,
        response_schema: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Single-shot generation in JSON mode, constrained to response_schema when given.
        No retry, failures propagate
        """
        settings = self.settings
        genai.configure(api_key=self._require_api_key(settings))

        model = genai.GenerativeModel(
            settings.gemini_model,
            system_instruction=system_instruction
        )

        logging.debug("Prompt: " + prompt)

        response = await model.generate_content_async(
            prompt,
            generation_config=self._generation_config(settings, temperature, response_schema),
            safety_settings=self.safety_settings
        )

        if not response.parts:
            raise ValueError(ERROR_NO_AI_RESPONSE)

        text = response.text
        if not text:
            raise ValueError(ERROR_NO_AI_RESPONSE)

        logging.info(f"Gemini generated {len(text)} characters")

        cleaned = clean_json_string(text)
        if cleaned != text:
            logging.warning("Sanitized LLM output by removing code fences/formatting artifacts for JSON parsing")

        return cleaned

    async def create_criteria_template(self, reference_text: str) -> List[EvaluationCriteria]:
        """
        Synthesize a standardized list of positive, scorable criteria from reference reviews.
        Every returned criterion has type STRENGTH and score 0. May return an empty list
        """
        self._require_api_key(self.settings)

        try:
            text = await self.generate_json(
                prompt=get_template_prompt(reference_text),
                system_instruction=TEMPLATE_SYSTEM_INSTRUCTION,
                response_schema=TEMPLATE_RESPONSE_SCHEMA
            )
            data = validate_json_response(text, TemplateResponse)
        except Exception as e:
            logging.error(f"Gemini Template Error: {str(e)}", exc_info=True)
            raise AcquisitionError(ERROR_TEMPLATE_GENERATION) from e

        logging.info(f"Gemini template contains {len(data.criteria)} criteria")

        return [
            criterion.model_copy(update={"type": CriteriaType.STRENGTH, "score": 0})
            for criterion in data.criteria
        ]

    async def parse_raw_evaluations(self, raw_text: str) -> List[CandidateEvaluation]:
        """
        Split raw review notes into candidate evaluations with strength and weakness criteria
        """
        self._require_api_key(self.settings)

        try:
            text = await self.generate_json(
                prompt=get_parse_evaluation_prompt(raw_text),
                system_instruction=PARSE_SYSTEM_INSTRUCTION,
                response_schema=PARSE_RESPONSE_SCHEMA
            )
            data = validate_json_response(text, ParseResponse)
        except Exception as e:
            logging.error(f"Gemini Parse Error: {str(e)}", exc_info=True)
            raise AcquisitionError(ERROR_PARSE_EVALUATION) from e

        logging.info(f"Gemini parsed {len(data.candidates)} candidates")
        return data.candidates

# Singleton instance
_gemini_service = None

def get_gemini_service() -> GeminiServices:
    """
    Get or create GeminiServices singleton
    """

    global _gemini_service
    if _gemini_service is None:
        _gemini_service = GeminiServices()
    return _gemini_service
