"""
환경변수 및 설정 관리 모듈
"""

import os
import logging
from dotenv import load_dotenv
from typing import List, Optional

from .exceptions import ConfigurationError
from .models import RecipientSource

logger = logging.getLogger(__name__)

# .env 파일 로드 (로컬 개발 환경용)
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    """true/false 형식의 환경변수 해석"""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigClass:
    """애플리케이션 설정 클래스"""

    def __init__(self):
        # Parameter Store에서 가져온 credential 캐시 (cold start 당 1회)
        self._parameter_credential: Optional[str] = None

    # 이메일 설정
    MAIL_SUBJECT = "File Download Status"
    DEFAULT_MAILGUN_API_BASE = "https://api.mailgun.net/v3"

    # 업로드 오브젝트 기본 이름
    DEFAULT_UPLOAD_OBJECT_NAME = "uploaded-file.txt"

    # credential 인코딩 방식
    CREDENTIAL_ENCODINGS = ("auto", "base64", "raw")

    @property
    def BUCKET_NAME(self) -> str:
        """GCS 버킷명"""
        return os.getenv("BUCKET_NAME", "")

    @property
    def ACCESS_KEY(self) -> str:
        """
        GCS 서비스 계정 credential (base64 또는 JSON 원문)

        ACCESS_KEY가 비어 있고 ACCESS_KEY_PARAMETER가 지정되어 있으면
        Parameter Store에서 로드
        """
        value = os.getenv("ACCESS_KEY", "")
        if value:
            return value

        parameter_name = self.ACCESS_KEY_PARAMETER
        if not parameter_name:
            return ""

        if self._parameter_credential is None:
            try:
                from .parameter_store import get_parameter

                self._parameter_credential = get_parameter(parameter_name, with_decryption=True)
            except Exception as e:
                logger.warning(f"Parameter Store에서 credential 로드 실패: {e}")
                return ""

        return self._parameter_credential

    @property
    def ACCESS_KEY_PARAMETER(self) -> str:
        """credential이 저장된 Parameter Store 파라미터명"""
        return os.getenv("ACCESS_KEY_PARAMETER", "")

    @property
    def DYNAMODB_TABLE(self) -> str:
        """감사 기록 테이블명"""
        return os.getenv("DYNAMODB_TABLE", "")

    @property
    def MAILGUN_API_KEY(self) -> str:
        return os.getenv("MAILGUN_API_KEY", "")

    @property
    def MAILGUN_DOMAIN(self) -> str:
        return os.getenv("MAILGUN_DOMAIN", "")

    @property
    def MAILGUN_API_BASE(self) -> str:
        return os.getenv("MAILGUN_API_BASE", self.DEFAULT_MAILGUN_API_BASE).rstrip("/")

    @property
    def MAIL_FROM(self) -> str:
        """발신자 (미설정 시 Mailgun 도메인 기본 주소)"""
        return os.getenv("MAIL_FROM") or f"File Download <mailgun@{self.MAILGUN_DOMAIN}>"

    @property
    def RECIPIENT_SOURCE(self) -> RecipientSource:
        """수신인 결정 방식 (event 또는 fixed)"""
        value = os.getenv("RECIPIENT_SOURCE", "event").strip().lower()
        try:
            return RecipientSource(value)
        except ValueError:
            logger.warning(f"알 수 없는 RECIPIENT_SOURCE '{value}', event로 처리")
            return RecipientSource.EVENT

    @property
    def FIXED_RECIPIENT_EMAIL(self) -> str:
        """RECIPIENT_SOURCE=fixed일 때 사용할 수신인"""
        return os.getenv("FIXED_RECIPIENT_EMAIL", "").strip()

    @property
    def VALIDATE_BEFORE_UPLOAD(self) -> bool:
        """업로드 전 zip 검증 여부"""
        return _env_flag("VALIDATE_BEFORE_UPLOAD", True)

    @property
    def CREDENTIAL_ENCODING(self) -> str:
        value = os.getenv("CREDENTIAL_ENCODING", "auto").strip().lower()
        if value not in self.CREDENTIAL_ENCODINGS:
            logger.warning(f"알 수 없는 CREDENTIAL_ENCODING '{value}', auto로 처리")
            return "auto"
        return value

    @property
    def UPLOAD_OBJECT_NAME(self) -> str:
        return os.getenv("UPLOAD_OBJECT_NAME") or self.DEFAULT_UPLOAD_OBJECT_NAME

    @property
    def DOWNLOAD_TIMEOUT(self) -> float:
        """다운로드 타임아웃 (초)"""
        try:
            return float(os.getenv("DOWNLOAD_TIMEOUT", "60"))
        except ValueError:
            return 60.0

    @property
    def AWS_REGION(self) -> str:
        return os.getenv("AWS_REGION", "us-east-1")

    @property
    def DB_PATH(self) -> str:
        """SQLite DB 파일 경로 (로컬 실행용)"""
        return os.getenv("DB_PATH", "data/submission_relay.db")

    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()

    def missing_settings(self) -> List[str]:
        """
        누락된 필수 설정 목록

        Returns:
            누락된 환경변수명 리스트 (모두 있으면 빈 리스트)
        """
        required = [
            ("BUCKET_NAME", self.BUCKET_NAME),
            ("ACCESS_KEY", self.ACCESS_KEY),
            ("DYNAMODB_TABLE", self.DYNAMODB_TABLE),
            ("MAILGUN_API_KEY", self.MAILGUN_API_KEY),
            ("MAILGUN_DOMAIN", self.MAILGUN_DOMAIN),
        ]

        if self.RECIPIENT_SOURCE is RecipientSource.FIXED:
            required.append(("FIXED_RECIPIENT_EMAIL", self.FIXED_RECIPIENT_EMAIL))

        return [name for name, value in required if not value]

    def validate(self):
        """필수 환경변수 검증"""
        missing = self.missing_settings()
        if missing:
            raise ConfigurationError(missing)
        return True


# 싱글톤 인스턴스 생성
Config = ConfigClass()
