from typing import Any, Dict, Optional


def create_response(success: bool, message: str, data: Any = None, error: Optional[Any] = None) -> Dict[str, Any]:
    """Standard envelope for error and status payloads"""
    response = {"success": success, "message": message}
    if data is not None:
        response["data"] = data
    if error is not None:
        response["error"] = error
    return response
