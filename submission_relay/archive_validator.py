"""
zip 아카이브 검증
"""
import io
import logging
import zipfile

logger = logging.getLogger(__name__)

INVALID_ARCHIVE_MESSAGE = "Invalid or empty archive"


def is_valid_archive(data: bytes) -> bool:
    """
    바이트가 엔트리 1개 이상인 zip 아카이브인지 확인 (예외를 던지지 않음)

    Args:
        data: 다운로드된 파일 내용

    Returns:
        파싱 성공 + 엔트리 존재 시 True
    """
    if not data:
        logger.warning("아카이브 검증 실패: 빈 파일")
        return False

    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            entries = archive.namelist()
    except Exception as e:
        logger.warning(f"아카이브 검증 실패: {e}")
        return False

    if not entries:
        logger.warning("아카이브 검증 실패: 엔트리 없음")
        return False

    logger.info(f"아카이브 검증 통과: 엔트리 {len(entries)}개")
    return True
