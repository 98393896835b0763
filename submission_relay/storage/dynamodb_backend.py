"""
DynamoDB 스토리지 백엔드 구현
AWS Lambda 환경에서 감사 기록을 DynamoDB 테이블에 저장
"""

import logging
from typing import Dict, List, Optional
import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import AuditError
from .base import AuditBackend

logger = logging.getLogger(__name__)


class DynamoDBBackend(AuditBackend):
    """DynamoDB 감사 기록 백엔드"""

    def __init__(self, region_name: Optional[str] = None):
        """DynamoDBBackend 초기화 (리전 미지정 시 Config에서 로드)"""
        if region_name is None:
            from ..config import Config

            region_name = Config.AWS_REGION

        self.region_name = region_name
        self._dynamodb = None
        self._tables = {}  # 테이블별 캐시

    def _get_dynamodb(self):
        """Lazy loading: boto3 DynamoDB 리소스"""
        if self._dynamodb is None:
            self._dynamodb = boto3.resource("dynamodb", region_name=self.region_name)
        return self._dynamodb

    def _get_table(self, table_name: str):
        """Lazy loading: 테이블 리소스"""
        if table_name not in self._tables:
            dynamodb = self._get_dynamodb()
            self._tables[table_name] = dynamodb.Table(table_name)
        return self._tables[table_name]

    def put_audit_record(self, table_name: str, item: Dict) -> None:
        """감사 기록 저장"""
        try:
            table = self._get_table(table_name)
            # append-only: 동일 id 덮어쓰기 금지 (SQLite PRIMARY KEY와 동일)
            table.put_item(Item=item, ConditionExpression=Attr("id").not_exists())
            logger.info(f"DynamoDB 감사 기록 저장 완료: {item.get('id')}")

        except (ClientError, BotoCoreError) as e:
            logger.error(f"DynamoDB put_item 실패: {e}")
            raise AuditError(f"Failed to write audit record to {table_name}: {e}") from e

    def list_audit_records(self, table_name: str, recipient_email: str) -> List[Dict]:
        """수신인별 감사 기록 조회"""
        try:
            table = self._get_table(table_name)
            scan_kwargs = {"FilterExpression": Attr("UserEmail").eq(recipient_email)}
            response = table.scan(**scan_kwargs)

            items = response.get("Items", [])

            # 페이지네이션 처리
            while "LastEvaluatedKey" in response:
                response = table.scan(
                    ExclusiveStartKey=response["LastEvaluatedKey"], **scan_kwargs
                )
                items.extend(response.get("Items", []))

            logger.info(f"DynamoDB 감사 기록 조회 완료: {recipient_email} ({len(items)}건)")
            return sorted(items, key=lambda item: int(item["Timestamp"]))

        except (ClientError, BotoCoreError) as e:
            logger.error(f"DynamoDB scan 실패: {e}")
            raise AuditError(f"Failed to read audit records from {table_name}: {e}") from e
