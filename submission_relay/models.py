"""
파이프라인 데이터 모델
"""
import json
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .exceptions import EventParseError


class StatusOutcome(Enum):
    """파이프라인 처리 결과"""
    SUCCESS = "Success"
    FAILURE = "Failure"


class RecipientSource(Enum):
    """상태 이메일 수신인 결정 방식"""
    EVENT = "event"  # SNS 메시지의 email 필드
    FIXED = "fixed"  # FIXED_RECIPIENT_EMAIL 설정값


def _text_field(message: Dict[str, Any], *keys: str) -> str:
    """첫 번째로 값이 있는 필드 반환 (문자열이 아니면 EventParseError)"""
    for key in keys:
        value = message.get(key)
        if value is None or value == "":
            continue
        if not isinstance(value, str):
            raise EventParseError(f"{key} 필드는 문자열이어야 합니다: {type(value).__name__}")
        return value
    return ""


@dataclass(frozen=True)
class InboundEvent:
    """SNS 메시지로 전달된 제출 정보"""

    recipient_name: str
    recipient_email: str
    submission_url: str

    @classmethod
    def from_message(cls, message: Dict[str, Any]) -> "InboundEvent":
        """
        SNS 메시지 본문(dict)을 InboundEvent로 변환

        Args:
            message: firstName/recipientName, email, submissionUrl 필드를 가진 dict

        Returns:
            InboundEvent 객체
        """
        if not isinstance(message, dict):
            raise EventParseError(f"메시지가 JSON 객체가 아닙니다: {type(message).__name__}")

        return cls(
            recipient_name=_text_field(message, "firstName", "recipientName"),
            recipient_email=_text_field(message, "email", "recipientEmail").strip(),
            submission_url=_text_field(message, "submissionUrl").strip(),
        )

    @classmethod
    def from_lambda_event(cls, event: Dict[str, Any]) -> "InboundEvent":
        """
        Lambda 이벤트에서 InboundEvent 추출

        SNS 엔벨로프(Records[0].Sns.Message)와 로컬 실행용 payload dict를 모두 지원

        Raises:
            EventParseError: 엔벨로프 구조가 잘못되었거나 메시지가 JSON이 아닌 경우
        """
        if not isinstance(event, dict):
            raise EventParseError("이벤트가 dict가 아닙니다")

        if "Records" not in event:
            return cls.from_message(event)

        try:
            raw_message = event["Records"][0]["Sns"]["Message"]
        except (KeyError, IndexError, TypeError) as e:
            raise EventParseError(f"SNS 레코드 구조가 올바르지 않습니다: {e}") from e

        if isinstance(raw_message, dict):
            return cls.from_message(raw_message)

        try:
            message = json.loads(raw_message)
        except (TypeError, ValueError) as e:
            raise EventParseError(f"SNS 메시지 JSON 파싱 실패: {e}") from e

        return cls.from_message(message)


@dataclass
class FetchedContent:
    """다운로드된 파일 내용"""

    data: bytes
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ServiceAccountCredential:
    """디코딩된 서비스 계정 credential"""

    project_id: str
    info: Dict[str, Any] = field(repr=False)


@dataclass(frozen=True)
class AuditRecord:
    """감사 테이블에 기록되는 발송 이력 (append-only)"""

    id: str
    recipient_email: str
    timestamp: int  # epoch milliseconds

    @classmethod
    def create(cls, recipient_email: str, now_ms: Optional[int] = None) -> "AuditRecord":
        """현재 시각으로 기록 생성 (id = timestamp_email)"""
        timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
        return cls(
            id=f"{timestamp}_{recipient_email}",
            recipient_email=recipient_email,
            timestamp=timestamp,
        )

    def to_item(self) -> Dict[str, Any]:
        """스토리지 아이템 형식으로 변환"""
        return {
            "id": self.id,
            "UserEmail": self.recipient_email,
            "Timestamp": self.timestamp,
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "AuditRecord":
        """스토리지 아이템을 AuditRecord로 변환"""
        return cls(
            id=item["id"],
            recipient_email=item["UserEmail"],
            timestamp=int(item["Timestamp"]),
        )


@dataclass
class PipelineResult:
    """파이프라인 1회 실행 결과"""

    outcome: StatusOutcome
    message: str
    recipient_email: str
    location: Optional[str] = None
    audit_record: Optional[AuditRecord] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is StatusOutcome.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "message": self.message,
            "recipient_email": self.recipient_email,
            "location": self.location,
            "audit_id": self.audit_record.id if self.audit_record else None,
        }
