"""
상태 이메일 전송 모듈
Mailgun HTTP API로 고정 제목의 텍스트 메일 전송
"""
import logging
from typing import Optional

import requests

from .config import Config
from .exceptions import NotificationError
from .models import StatusOutcome

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Submission failed."


def build_email_body(outcome: StatusOutcome, message: Optional[str]) -> str:
    """결과와 메시지를 담은 본문 생성"""
    return f"Status of file download: {outcome.value}\n\n{message or DEFAULT_FAILURE_MESSAGE}"


class MailgunEmailSender:
    """Mailgun 상태 이메일 전송"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        domain: Optional[str] = None,
        sender: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: float = 30,
    ):
        self.config = Config
        self.api_key = api_key or self.config.MAILGUN_API_KEY
        self.domain = domain or self.config.MAILGUN_DOMAIN
        self.sender = sender or self.config.MAIL_FROM
        self.api_base = (api_base or self.config.MAILGUN_API_BASE).rstrip("/")
        self.timeout = timeout

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/{self.domain}/messages"

    def _create_message(self, recipient: str, outcome: StatusOutcome, message: str) -> dict:
        """Mailgun 메시지 필드 생성"""
        return {
            "from": self.sender,
            "to": recipient,
            "subject": self.config.MAIL_SUBJECT,
            "text": build_email_body(outcome, message),
        }

    def notify(self, recipient: str, outcome: StatusOutcome, message: str) -> None:
        """
        상태 이메일 전송

        Args:
            recipient: 수신자 이메일
            outcome: 처리 결과
            message: 본문 메시지

        Raises:
            NotificationError: 전송 실패 (네트워크 오류, non-2xx 응답)
        """
        logger.info(f"상태 이메일 전송: {recipient} (결과: {outcome.value})")

        data = self._create_message(recipient, outcome, message)

        try:
            response = requests.post(
                self.messages_url,
                auth=("api", self.api_key),
                data=data,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"이메일 전송 실패: {recipient} - {e}")
            raise NotificationError(f"Failed to send status email to {recipient}: {e}") from e

        logger.info(f"이메일 전송 성공: {recipient}")
