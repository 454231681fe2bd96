from typing import Any, Dict, Optional


class RelayException(Exception):
    """Base class for failures that map onto a caller-facing response."""

    status_code: int = 500

    def __init__(self, error: str, status_code: Optional[int] = None) -> None:
        super().__init__(error)
        self.error = error
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error}


class InvalidPromptException(RelayException):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Missing 'prompt' in request body")


class PromptTooLongException(RelayException):
    status_code = 400

    def __init__(self, max_chars: int, length: int) -> None:
        super().__init__(f"Prompt too long (max {max_chars} chars)")
        self.max_chars = max_chars
        self.length = length


class ConfigurationException(RelayException):
    status_code = 500

    def __init__(self, setting: str) -> None:
        super().__init__("Server misconfiguration")
        self.setting = setting


class UpstreamServiceException(RelayException):
    status_code = 502

    def __init__(self, upstream_status: int, detail: str = "") -> None:
        super().__init__("AI service error")
        self.upstream_status = upstream_status
        self.detail = detail

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error, "status": self.upstream_status}


class EmptyBlueprintException(RelayException):
    status_code = 502

    def __init__(self) -> None:
        super().__init__("AI returned empty response")


class InternalRelayException(RelayException):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__("Internal Server Error")
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}
