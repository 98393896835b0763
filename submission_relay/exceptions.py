"""
파이프라인 예외 정의
fetch/validate/upload 단계 오류는 실패 알림으로 전환되고,
알림/감사 기록 단계 오류는 Lambda까지 전파됨
"""


class SubmissionRelayError(Exception):
    """모든 파이프라인 예외의 기본 클래스"""


class ConfigurationError(SubmissionRelayError):
    """필수 설정 누락"""

    def __init__(self, missing_settings):
        self.missing_settings = list(missing_settings)
        super().__init__(
            f"필수 환경변수가 설정되지 않았습니다: {', '.join(self.missing_settings)}"
        )


class EventParseError(SubmissionRelayError):
    """인바운드 이벤트 파싱 실패"""


class FetchError(SubmissionRelayError):
    """파일 다운로드 실패 (네트워크, 타임아웃, non-2xx)"""


class ValidationError(SubmissionRelayError):
    """zip 아카이브 검증 실패"""


class UploadError(SubmissionRelayError):
    """오브젝트 스토리지 업로드 실패 (credential 디코딩 포함)"""


class NotificationError(SubmissionRelayError):
    """상태 이메일 전송 실패"""


class AuditError(SubmissionRelayError):
    """감사 기록 저장 실패"""


# 실패 분기로 전환되는 단계 오류
STAGE_ERRORS = (FetchError, ValidationError, UploadError)
