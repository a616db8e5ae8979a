"""
Shared constants for the evaluation form generator
"""

# Star rating bounds
MIN_SCORE = 1
MAX_SCORE = 5
UNRATED_SCORE = 0

# Placeholder used when no candidate names were entered
PLACEHOLDER_NAME = "Intern {index}"

# Role column of the form and the CSV export
DEFAULT_ROLE = "Intern/Member"

# CSV Export
CSV_BOM = "\ufeff"
CSV_MIME_TYPE = "text/csv;charset=utf-8;"
CSV_FILE_PREFIX = "evaluation_results_"

# Error Messages
ERROR_API_KEY_MISSING = "API Key is missing."
ERROR_NO_AI_RESPONSE = "No response from AI"
ERROR_TEMPLATE_GENERATION = "Failed to generate criteria template."
ERROR_PARSE_EVALUATION = "Failed to parse evaluation data."
ERROR_CRITERIA_EXTRACTION = "Could not extract criteria from the provided text."
ERROR_ANALYSIS = "An error occurred while analyzing the text. Please check your API key and try again."
ERROR_GENERATION_IN_PROGRESS = "An evaluation form is already being generated. Please wait."

# Loaded by the "Load Example" action of the setup form
SAMPLE_EVALUATION_DATA = """Điểm mạnh:
Nam thể hiện sự nhiệt huyết cao trong công việc.
Có kiến thức cơ bản vững chắc về Java.
Hoàn thành tốt các nhiệm vụ được giao.
Điểm yếu:
Cần cải thiện sự cẩn trọng và chú ý đến chi tiết để đảm bảo chất lượng đầu ra tốt nhất trước khi bàn giao.
Khuyến nghị:
Cần bổ sung các chương trình đào tạo chuyên sâu hoặc huấn luyện thêm về quy trình kiểm soát chất lượng."""
