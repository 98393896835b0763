"""
오류 메시지 민감정보 필터링
"""
import re

_PATTERNS = [
    (r'(password|passwd|pwd)=[^&\s]*', 'password=[REDACTED]'),
    (r'(token|secret|key|apikey|api_key|signature|x-goog-signature)=[^&\s]*', r'\1=[REDACTED]'),
    (r'Authorization:\s*[^\s]+', 'Authorization: [REDACTED]'),
    (r'Bearer\s+[^\s]+', 'Bearer [REDACTED]'),
    (r'"(password|passwd|pwd|token|secret|key|private_key)":\s*"[^"]*"', r'"\1": "[REDACTED]"'),
]


def sanitize_error(error_msg: str) -> str:
    """오류 메시지에서 민감정보 필터링"""
    sanitized = error_msg
    for pattern, replacement in _PATTERNS:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)
    return sanitized
