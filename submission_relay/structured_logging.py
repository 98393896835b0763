"""
구조화 로깅 유틸리티
파이프라인 단계별 이벤트를 JSON 한 줄로 기록 (CloudWatch Logs Insights 필터용)
"""
import json
import logging
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime, timezone

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "submission_relay.log"


class StructuredLogger:
    """event/message + 임의 필드를 JSON으로 직렬화하는 logger 래퍼"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_event(self, level: int, event: str, message: str, **fields):
        """
        JSON 이벤트 기록

        Args:
            level: logging 레벨 (logging.INFO 등)
            event: 이벤트 타입 (lambda_start, stage_failed, audit_recorded 등)
            message: 사람이 읽기 쉬운 메시지
            **fields: recipient, duration_ms 같은 추가 필드
        """
        if not self.logger.isEnabledFor(level):
            return

        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": logging.getLevelName(level),
            "event": event,
            "message": message,
        }
        payload.update(fields)

        # datetime, Enum 등은 str()로
        self.logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))

    def info(self, event: str, message: str, **fields):
        self.log_event(logging.INFO, event, message, **fields)

    def warning(self, event: str, message: str, **fields):
        self.log_event(logging.WARNING, event, message, **fields)

    def error(self, event: str, message: str, **fields):
        self.log_event(logging.ERROR, event, message, **fields)


def get_structured_logger(name: str) -> StructuredLogger:
    """
    구조화 로거 생성

    Example:
        >>> logger = get_structured_logger(__name__)
        >>> logger.info(event="notification_sent", message="상태 이메일 전송 완료",
        ...             recipient="user@example.com", outcome="Success")
    """
    return StructuredLogger(logging.getLogger(name))


def setup_logging(level: str = None):
    """
    루트 로거 설정

    Lambda(AWS_EXECUTION_ENV 존재)는 stdout만 사용하고,
    로컬 실행은 logs/submission_relay.log 로테이션 파일에도 기록한다.
    LOG_LEVEL 환경변수로 레벨 지정 (기본 INFO)
    """
    level_name = (level or os.environ.get('LOG_LEVEL', 'INFO')).upper()
    formatter = logging.Formatter(LOG_FORMAT)

    handlers = [logging.StreamHandler()]

    if os.environ.get('AWS_EXECUTION_ENV') is None:
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        log_dir = os.path.join(project_root, 'logs')
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME),
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding='utf-8'
        ))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def log_stage_failure(logger: StructuredLogger, recipient: str, error: Exception, message: str):
    """fetch/validate/upload 단계 실패 (실패 메일로 전환되는 경우)"""
    logger.warning(
        event="stage_failed",
        message=message,
        recipient=recipient,
        error_type=type(error).__name__,
    )


def log_notification_sent(logger: StructuredLogger, recipient: str, outcome: str):
    """상태 이메일 전송 로그"""
    logger.info(
        event="notification_sent",
        message=f"상태 이메일 전송 완료: {recipient}",
        recipient=recipient,
        outcome=outcome,
    )


def log_pipeline_outcome(logger: StructuredLogger, result, duration_ms: float):
    """파이프라인 최종 결과 로그 (성공 INFO, 실패 ERROR)"""
    if result.succeeded:
        logger.info(
            event="pipeline_success",
            message=result.message,
            recipient=result.recipient_email,
            location=result.location,
            duration_ms=duration_ms,
        )
    else:
        logger.error(
            event="pipeline_failure",
            message=result.message,
            recipient=result.recipient_email,
            duration_ms=duration_ms,
        )
