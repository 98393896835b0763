"""
AWS Systems Manager Parameter Store를 사용한 credential 관리
GCS 서비스 계정 키를 환경변수 대신 SecureString으로 보관할 때 사용
"""
import logging
import os
import boto3
from botocore.exceptions import ClientError
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class ParameterStore:
    """AWS Systems Manager Parameter Store 클라이언트"""

    def __init__(self, region_name: Optional[str] = None):
        """
        Args:
            region_name: AWS 리전 (None이면 AWS_REGION 환경변수)
        """
        self.region_name = region_name or os.getenv("AWS_REGION", "us-east-1")
        self.client = None
        self._cache: Dict[str, str] = {}

    def _get_client(self):
        """SSM 클라이언트 가져오기 (lazy loading)"""
        if self.client is None:
            self.client = boto3.client(
                service_name='ssm',
                region_name=self.region_name
            )
        return self.client

    def get_parameter(self, parameter_name: str, with_decryption: bool = False) -> str:
        """
        Parameter Store에서 파라미터 값 가져오기

        Args:
            parameter_name: 파라미터 이름 (예: /submission-relay/gcs-credential)
            with_decryption: SecureString 복호화 여부

        Returns:
            파라미터 값 문자열

        Raises:
            Exception: 파라미터를 가져오는데 실패한 경우
        """
        if parameter_name in self._cache:
            logger.debug(f"캐시된 파라미터 사용: {parameter_name}")
            return self._cache[parameter_name]

        try:
            logger.info(f"Parameter Store에서 파라미터 가져오기: {parameter_name}")
            response = self._get_client().get_parameter(
                Name=parameter_name,
                WithDecryption=with_decryption
            )

            value = response['Parameter']['Value']
            self._cache[parameter_name] = value
            return value

        except ClientError as e:
            error_code = e.response['Error']['Code']
            logger.error(f"Parameter Store 오류 ({error_code}): {e}")

            if error_code == 'ParameterNotFound':
                raise Exception(f"파라미터를 찾을 수 없습니다: {parameter_name}")
            elif error_code == 'AccessDeniedException':
                raise Exception(f"파라미터 접근 권한이 없습니다: {parameter_name}")
            else:
                raise


# 싱글톤 인스턴스
_parameter_store: Optional[ParameterStore] = None


def get_parameter(parameter_name: str, with_decryption: bool = False) -> str:
    """
    Parameter Store 파라미터 조회 (편의 함수)

    Args:
        parameter_name: 파라미터 이름
        with_decryption: SecureString 복호화 여부

    Returns:
        파라미터 값
    """
    global _parameter_store
    if _parameter_store is None:
        _parameter_store = ParameterStore()
    return _parameter_store.get_parameter(parameter_name, with_decryption=with_decryption)
