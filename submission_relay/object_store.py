"""
GCS 업로드 모듈
서비스 계정 credential로 인증하여 고정 오브젝트명으로 파일 저장
"""
import logging
from typing import Callable, Optional

from google.cloud import storage
from google.oauth2 import service_account

from .credentials import decode_credential
from .exceptions import UploadError
from .models import ServiceAccountCredential

logger = logging.getLogger(__name__)

DEFAULT_OBJECT_NAME = "uploaded-file.txt"


def create_storage_client(credential: ServiceAccountCredential) -> storage.Client:
    """credential의 프로젝트로 한정된 GCS 클라이언트 생성"""
    gcp_credentials = service_account.Credentials.from_service_account_info(credential.info)
    return storage.Client(project=credential.project_id, credentials=gcp_credentials)


class GCSUploader:
    """GCS 버킷 업로드"""

    def __init__(
        self,
        object_name: str = DEFAULT_OBJECT_NAME,
        credential_encoding: str = "auto",
        client_factory: Optional[Callable[[ServiceAccountCredential], storage.Client]] = None,
    ):
        """
        Args:
            object_name: 버킷 내 저장할 오브젝트명
            credential_encoding: credential blob 인코딩 ("auto", "base64", "raw")
            client_factory: 테스트용 클라이언트 생성 함수
        """
        self.object_name = object_name
        self.credential_encoding = credential_encoding
        self._client_factory = client_factory or create_storage_client

    def location(self, bucket: str) -> str:
        """업로드 위치 URI"""
        return f"gs://{bucket}/{self.object_name}"

    def upload(
        self,
        data: bytes,
        credential_blob: str,
        bucket: str,
        content_type: Optional[str] = None,
    ) -> str:
        """
        파일 내용을 버킷에 업로드

        Args:
            data: 업로드할 바이트
            credential_blob: 서비스 계정 credential (base64 또는 JSON)
            bucket: 대상 버킷명
            content_type: 오브젝트 content-type (None이면 GCS 기본값)

        Returns:
            gs://<bucket>/<object> 위치

        Raises:
            UploadError: credential 디코딩, 인증, 쓰기 실패
        """
        logger.info(f"GCS 업로드 시작: {bucket} ({len(data):,} bytes)")

        credential, error = decode_credential(credential_blob, self.credential_encoding)
        if credential is None:
            raise UploadError(error)

        try:
            client = self._client_factory(credential)
            blob = client.bucket(bucket).blob(self.object_name)
            if content_type:
                blob.upload_from_string(data, content_type=content_type)
            else:
                blob.upload_from_string(data)
        except Exception as e:
            logger.error(f"GCS 업로드 실패: {e}")
            raise UploadError(str(e)) from e

        location = self.location(bucket)
        logger.info(f"GCS 업로드 완료: {location}")
        return location
