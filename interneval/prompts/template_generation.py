import logging

TEMPLATE_SYSTEM_INSTRUCTION = """You are an HR Specialist creating a Standardized Evaluation Form. You turn free-form performance reviews into short, positive, scorable criteria that apply to any intern."""

TEMPLATE_PROMPT = """
You are an HR Specialist creating a Standardized Evaluation Form.
Analyze the provided performance reviews (Strengths/Weaknesses).
Synthesize them into a distinct list of **Positive, Scorable Criteria** (attributes) that can apply to any intern.

Rules:
1. Deduplicate similar points (e.g., "Good Java", "Java knowledge" -> "Java Knowledge").
2. Convert Weaknesses into Positive Attributes for scoring (e.g., "Careless" -> "Carefulness & Attention to Detail").
3. Keep descriptions concise but clear (in Vietnamese).
4. Return a flat list of criteria. Set the 'type' to 'STRENGTH' for all items as they are now positive attributes.
"""

TEMPLATE_RESPONSE_FORMAT = (
    '{"criteria": ['
    '{"id": "c1", "text": "Kỹ năng Java", "type": "STRENGTH", "score": 0}, '
    '{"id": "c2", "text": "Thái độ làm việc", "type": "STRENGTH", "score": 0}'
    ']}'
)

# Sent as response_schema so Gemini constrains its output to this shape
TEMPLATE_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "criteria": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "text": {
                        "type": "STRING",
                        "description": "The standardized criteria label (e.g. 'Kỹ năng Java', 'Thái độ làm việc')",
                    },
                    "type": {"type": "STRING", "enum": ["STRENGTH"]},
                    "score": {"type": "NUMBER", "description": "Always 0"},
                },
                "required": ["id", "text", "type", "score"],
            },
        },
    },
    "required": ["criteria"],
}

def get_template_prompt(reference_text: str) -> str:
    """
    Generate criteria template prompt from reference review notes
    """
    logging.info("Generating criteria template prompt | ref_len=%d", len(reference_text))
    return f"""{TEMPLATE_PROMPT}
Every criterion needs a unique "id", the criterion label as "text", "type" set to "STRENGTH" and "score" always 0.

Reference Data:
{reference_text}

Return ONLY this JSON format (no markdown, no code blocks):
{TEMPLATE_RESPONSE_FORMAT}"""
