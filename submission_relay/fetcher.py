"""
제출 파일 다운로드 모듈
"""
import logging

import requests

from .exceptions import FetchError
from .models import FetchedContent

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


def fetch(url: str, timeout: float = DEFAULT_TIMEOUT) -> FetchedContent:
    """
    URL에서 파일을 바이너리로 다운로드 (단일 GET, 재시도 없음)

    Args:
        url: 제출 파일 URL
        timeout: 요청 타임아웃 (초)

    Returns:
        FetchedContent (바이트 + content-type)

    Raises:
        FetchError: URL 누락, 네트워크 오류, 타임아웃, non-2xx 응답
    """
    if not url:
        raise FetchError("submissionUrl이 비어 있습니다")

    logger.info(f"파일 다운로드 시작: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"파일 다운로드 타임아웃 ({timeout}초): {url}")
        raise FetchError(f"Download timed out after {timeout} seconds: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"파일 다운로드 실패: {e}")
        raise FetchError(str(e)) from e

    content_type = response.headers.get("Content-Type")
    logger.info(f"파일 다운로드 완료: {len(response.content):,} bytes (Content-Type: {content_type})")

    return FetchedContent(data=response.content, content_type=content_type)
