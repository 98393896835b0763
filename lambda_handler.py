"""
AWS Lambda 핸들러
SNS에서 트리거되어 제출 파일 다운로드, GCS 업로드, 상태 메일 전송
"""

import logging
import json
import time

from submission_relay.exceptions import EventParseError
from submission_relay.models import InboundEvent
from submission_relay.pipeline import SubmissionPipeline
from submission_relay.structured_logging import get_structured_logger

# 로깅 설정
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)
structured_logger = get_structured_logger(__name__)

# cold start 시 1회 생성
_pipeline = None


def get_pipeline() -> SubmissionPipeline:
    """파이프라인 lazy 생성"""
    global _pipeline
    if _pipeline is None:
        _pipeline = SubmissionPipeline(structured_logger=structured_logger)
    return _pipeline


def handler(event, context):
    """
    Lambda 함수 핸들러

    Args:
        event: Lambda 이벤트 (SNS 레코드)
        context: Lambda 컨텍스트

    Returns:
        dict: 실행 결과

    Raises:
        EventParseError, NotificationError, AuditError: Lambda 실패로 기록
    """
    start_time = time.time()

    logger.info("===== 제출 파일 처리 시작 =====")

    records = event.get("Records", []) if isinstance(event, dict) else []
    if len(records) > 1:
        logger.warning(f"SNS 레코드 {len(records)}건 수신, 첫 번째 레코드만 처리")
        structured_logger.warning(
            event="records_truncated",
            message="첫 번째 SNS 레코드만 처리",
            record_count=len(records),
        )

    structured_logger.info(
        event="lambda_start",
        message="제출 파일 처리 시작",
        function_name=context.function_name if context else "local",
        request_id=context.aws_request_id if context else "local",
    )

    try:
        inbound_event = InboundEvent.from_lambda_event(event)
        result = get_pipeline().run(inbound_event)

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000

        logger.error(f"Lambda 처리 중 오류 발생: {e}", exc_info=not isinstance(e, EventParseError))

        structured_logger.error(
            event="lambda_error",
            message=f"제출 파일 처리 실패: {str(e)}",
            duration_ms=duration_ms,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise

    duration_ms = (time.time() - start_time) * 1000

    if result is None:
        logger.info("===== 필수 설정 누락으로 처리 건너뜀 =====")
        return {
            "statusCode": 500,
            "body": json.dumps(
                {
                    "message": "Missing required configuration",
                    "skipped": True,
                    "duration_ms": duration_ms,
                }
            ),
        }

    logger.info("===== 제출 파일 처리 완료 =====")

    body = result.to_dict()
    body["duration_ms"] = duration_ms
    return {"statusCode": 200, "body": json.dumps(body)}
