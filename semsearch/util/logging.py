"""
Structured operation logging for the semantic search service.
Document text and credentials never reach the log in full.
"""

import logging
from typing import Any, Dict, List

SENSITIVE_FIELDS = ['text', 'query', 'token', 'secret', 'password', 'authorization']


class StructuredLogger:
    """Structured logger for document, vector and auth operations."""

    def __init__(self, name: str = "semsearch"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status == "failed":
            self.logger.error(message)
        else:
            self.logger.info(message)

    def log_document_operation(self, operation: str, doc_id: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a document-level operation."""
        log_details = {"doc_id": doc_id}
        if details:
            log_details.update(sanitize_payload(details))

        self.log_operation(f"document.{operation}", status, log_details)

    def log_vector_operation(self, operation: str, record_ids: List[str], details: Dict[str, Any] = None, status: str = "success"):
        """Log a vector store operation."""
        log_details = {"record_ids": record_ids[:10], "count": len(record_ids)}
        if details:
            log_details.update(details)

        self.log_operation(f"vector.{operation}", status, log_details)

    def log_auth_event(self, allowed: bool, reason: str = "", path: str = ""):
        """Log an access decision. Never pass the credential itself."""
        log_details = {"path": path}
        if reason:
            log_details["reason"] = reason

        if allowed:
            self.logger.debug(f"Operation: auth.check, Status: allowed, Details: {log_details}")
        else:
            self.logger.warning(f"Operation: auth.check, Status: denied, Details: {log_details}")

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()


def sanitize_payload(payload: Any, reveal_sensitive: bool = False, sensitive_fields: List[str] = None) -> Any:
    """Sanitize payloads for logging."""
    if sensitive_fields is None:
        sensitive_fields = SENSITIVE_FIELDS

    if isinstance(payload, dict):
        sanitized = {}
        for k, v in payload.items():
            if reveal_sensitive or k not in sensitive_fields:
                sanitized[k] = sanitize_payload(v, reveal_sensitive, sensitive_fields)
            else:
                sanitized[k] = "[REDACTED]"
        return sanitized
    elif isinstance(payload, str):
        # Truncate long strings
        return payload[:100] + "..." if len(payload) > 100 else payload
    elif isinstance(payload, list):
        return [sanitize_payload(item, reveal_sensitive, sensitive_fields) for item in payload]
    else:
        return payload
