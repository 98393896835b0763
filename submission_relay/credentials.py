"""
GCS 서비스 계정 credential 디코딩
base64 인코딩된 JSON 또는 JSON 원문을 지원
"""
import base64
import binascii
import json
import logging
from typing import Optional, Tuple

from .models import ServiceAccountCredential

logger = logging.getLogger(__name__)


def _decode_blob(blob: str, encoding: str) -> str:
    """인코딩 방식에 따라 JSON 문자열 추출"""
    stripped = blob.strip()

    if encoding == "raw":
        return stripped

    if encoding == "auto" and stripped.startswith("{"):
        return stripped

    # `base64` CLI 출력은 76자마다 줄바꿈 포함
    compact = "".join(stripped.split())
    return base64.b64decode(compact, validate=True).decode("utf-8")


def decode_credential(
    blob: str, encoding: str = "auto"
) -> Tuple[Optional[ServiceAccountCredential], Optional[str]]:
    """
    credential blob을 ServiceAccountCredential로 디코딩

    Args:
        blob: 환경변수/Parameter Store의 credential 값
        encoding: "auto" (JSON이면 그대로, 아니면 base64), "base64", "raw"

    Returns:
        (credential, None) 또는 (None, 오류 메시지)
    """
    if not blob or not blob.strip():
        return None, "Credential is empty"

    try:
        decoded = _decode_blob(blob, encoding)
    except (binascii.Error, ValueError) as e:
        logger.error(f"credential base64 디코딩 실패: {e}")
        return None, f"Credential could not be decoded: {e}"

    try:
        info = json.loads(decoded)
    except ValueError as e:
        logger.error(f"credential JSON 파싱 실패: {e}")
        return None, f"Credential is not valid JSON: {e}"

    if not isinstance(info, dict):
        return None, "Credential JSON must be an object"

    project_id = info.get("project_id")
    if not project_id:
        return None, "Credential is missing project_id"

    return ServiceAccountCredential(project_id=project_id, info=info), None
