"""
제출 파일 처리 파이프라인
다운로드 → zip 검증 → GCS 업로드 → 상태 이메일 → 감사 기록
"""
import logging
import time
from typing import Callable, Optional

from .archive_validator import INVALID_ARCHIVE_MESSAGE, is_valid_archive
from .audit_tracker import AuditTracker
from .config import Config
from .email_sender import DEFAULT_FAILURE_MESSAGE, MailgunEmailSender
from .exceptions import EventParseError, STAGE_ERRORS, ValidationError
from .fetcher import fetch
from .models import (
    FetchedContent,
    InboundEvent,
    PipelineResult,
    RecipientSource,
    StatusOutcome,
)
from .object_store import GCSUploader
from .structured_logging import (
    StructuredLogger,
    get_structured_logger,
    log_notification_sent,
    log_pipeline_outcome,
    log_stage_failure,
)
from .utils import sanitize_error

logger = logging.getLogger(__name__)


class SubmissionPipeline:
    """
    인바운드 이벤트 1건을 처리하는 파이프라인

    fetch/validate/upload 중 발생한 오류는 실패 알림으로 전환한다.
    상태 이메일은 항상 1회 전송되고, 감사 기록은 이메일 전송 후 항상 1회 저장된다.
    이메일 또는 감사 기록 단계의 오류는 호출자에게 전파된다.
    """

    def __init__(
        self,
        config=None,
        fetcher: Optional[Callable[..., FetchedContent]] = None,
        validator: Optional[Callable[[bytes], bool]] = None,
        uploader: Optional[GCSUploader] = None,
        notifier: Optional[MailgunEmailSender] = None,
        audit_tracker: Optional[AuditTracker] = None,
        structured_logger: Optional[StructuredLogger] = None,
    ):
        self.config = config or Config
        self.fetcher = fetcher or fetch
        self.validator = validator or is_valid_archive
        self.uploader = uploader or GCSUploader(
            object_name=self.config.UPLOAD_OBJECT_NAME,
            credential_encoding=self.config.CREDENTIAL_ENCODING,
        )
        self.notifier = notifier or MailgunEmailSender()
        self.audit_tracker = audit_tracker or AuditTracker()
        self.structured_logger = structured_logger or get_structured_logger(__name__)

    def resolve_recipient(self, event: InboundEvent) -> str:
        """
        상태 이메일 수신인 결정

        Raises:
            EventParseError: RecipientSource.EVENT인데 이벤트에 email이 없는 경우
        """
        if self.config.RECIPIENT_SOURCE is RecipientSource.FIXED:
            return self.config.FIXED_RECIPIENT_EMAIL

        if not event.recipient_email:
            raise EventParseError("이벤트에 수신인 email이 없습니다")
        return event.recipient_email

    def _download_validate_upload(self, event: InboundEvent, bucket: str, credential: str) -> str:
        """다운로드 → 검증 → 업로드 (업로드 위치 반환)"""
        content = self.fetcher(event.submission_url, timeout=self.config.DOWNLOAD_TIMEOUT)

        if self.config.VALIDATE_BEFORE_UPLOAD:
            if not self.validator(content.data):
                raise ValidationError(INVALID_ARCHIVE_MESSAGE)
        else:
            logger.info("zip 검증 건너뛰기 (VALIDATE_BEFORE_UPLOAD=false)")

        return self.uploader.upload(
            content.data, credential, bucket, content_type=content.content_type
        )

    def run(self, event: InboundEvent) -> Optional[PipelineResult]:
        """
        파이프라인 실행

        Args:
            event: 인바운드 이벤트

        Returns:
            PipelineResult, 필수 설정 누락 시 None (부수 효과 없음)

        Raises:
            EventParseError: 수신인을 결정할 수 없는 경우
            NotificationError: 상태 이메일 전송 실패 (감사 기록 생략)
            AuditError: 감사 기록 저장 실패
        """
        start_time = time.time()

        # 1. 필수 설정 검증
        missing = self.config.missing_settings()
        if missing:
            logger.error(f"필수 환경변수 누락: {', '.join(missing)}")
            self.structured_logger.error(
                event="configuration_missing",
                message="필수 설정 누락으로 처리 중단",
                missing_settings=missing,
            )
            return None

        bucket = self.config.BUCKET_NAME
        credential = self.config.ACCESS_KEY
        table_name = self.config.DYNAMODB_TABLE
        recipient = self.resolve_recipient(event)

        logger.info(f"제출 처리 시작: {event.submission_url} (수신인: {recipient})")

        # 2. 다운로드 → 검증 → 업로드
        location = None
        try:
            location = self._download_validate_upload(event, bucket, credential)
            outcome = StatusOutcome.SUCCESS
            message = f"Status of file download: Success. File path: {location}"
        except STAGE_ERRORS as e:
            outcome = StatusOutcome.FAILURE
            message = sanitize_error(str(e)) or DEFAULT_FAILURE_MESSAGE
            logger.warning(f"제출 처리 실패 ({type(e).__name__}): {message}")
            log_stage_failure(self.structured_logger, recipient, e, message)
        except Exception as e:
            outcome = StatusOutcome.FAILURE
            message = sanitize_error(str(e)) or DEFAULT_FAILURE_MESSAGE
            logger.error(f"제출 처리 중 예상치 못한 오류: {message}", exc_info=True)
            log_stage_failure(self.structured_logger, recipient, e, message)

        # 3. 상태 이메일 (실패 시 전파, 감사 기록 생략)
        try:
            self.notifier.notify(recipient, outcome, message)
        except Exception as e:
            logger.error(f"상태 이메일 전송 실패, 감사 기록 생략: {e}")
            raise
        log_notification_sent(self.structured_logger, recipient, outcome.value)

        # 4. 감사 기록
        try:
            audit_record = self.audit_tracker.record(recipient, table_name)
        except Exception as e:
            logger.error(f"감사 기록 저장 실패: {e}")
            raise
        self.structured_logger.info(
            event="audit_recorded",
            message="감사 기록 저장 완료",
            audit_id=audit_record.id,
            table=table_name,
        )

        result = PipelineResult(
            outcome=outcome,
            message=message,
            recipient_email=recipient,
            location=location,
            audit_record=audit_record,
        )

        # 5. 최종 결과 로그
        if result.succeeded:
            logger.info(message)
        else:
            logger.error(message)
        log_pipeline_outcome(self.structured_logger, result, (time.time() - start_time) * 1000)

        return result
