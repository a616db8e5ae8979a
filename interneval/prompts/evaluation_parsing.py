PARSE_SYSTEM_INSTRUCTION = """You are a precise data extraction engine. Split the input text into individual candidate profiles accurately."""

PARSE_EVALUATION_PROMPT = """
You are an expert HR Data Analyst. Your task is to analyze unstructured performance review notes and convert them into a structured evaluation form.

Input Text contains reviews for multiple interns/employees.
The text is separated by headers like "Điểm mạnh", "Điểm yếu", "Khuyến nghị".
Sometimes multiple reviews are pasted sequentially.
The input might contain names (e.g., "Nam") or be generic.

Your goal:
1. Identify distinct candidate reviews from the text block.
2. If a name is mentioned (e.g., "Nam"), use it. If not, generate a placeholder like "Intern 1", "Intern 2".
3. Extract specific, assessable items from "Điểm mạnh" (Strengths) and "Điểm yếu" (Weaknesses).
4. Extract the "Khuyến nghị" (Recommendation) as a string.
5. Ignore general "Lưu ý" (Notes) unless they contain specific feedback about the candidate's performance.
"""

PARSE_RESPONSE_FORMAT = (
    '{"candidates": [{"id": "cand-1", "name": "Nam", '
    '"positionRecommendation": "", '
    '"criteria": [{"id": "s1", "text": "", "type": "STRENGTH", "score": 0}, '
    '{"id": "w1", "text": "", "type": "WEAKNESS", "score": 0}]}]}'
)

PARSE_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "candidates": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "name": {"type": "STRING"},
                    "positionRecommendation": {"type": "STRING"},
                    "criteria": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "id": {"type": "STRING"},
                                "text": {
                                    "type": "STRING",
                                    "description": "The specific observation or behavior to evaluate.",
                                },
                                "type": {"type": "STRING", "enum": ["STRENGTH", "WEAKNESS"]},
                                "score": {"type": "NUMBER", "description": "Initialize to 0"},
                            },
                            "required": ["id", "text", "type", "score"],
                        },
                    },
                },
                "required": ["id", "name", "criteria"],
            },
        },
    },
    "required": ["candidates"],
}


def get_parse_evaluation_prompt(raw_text: str) -> str:
    """
    Generate raw evaluation parsing prompt
    """
    return f"""{PARSE_EVALUATION_PROMPT}
Here is the raw text to parse:

{raw_text}

Criterion "type" is either "STRENGTH" or "WEAKNESS". Initialize every "score" to 0.

Return ONLY this JSON format (no markdown, no code blocks):
{PARSE_RESPONSE_FORMAT}"""
