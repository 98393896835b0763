"""
상태 이메일 발송 감사 기록
호출 1회당 수신인/시각을 담은 기록 1건을 Storage에 추가
"""

import logging
from typing import List, Optional

from .models import AuditRecord
from .storage import get_storage_backend

logger = logging.getLogger(__name__)


class AuditTracker:
    """감사 기록 추적 클래스"""

    def __init__(self, backend=None):
        """초기화 (backend 미지정 시 StorageBackend lazy)"""
        self._backend = backend

    def _get_backend(self):
        """StorageBackend lazy 초기화"""
        if self._backend is None:
            self._backend = get_storage_backend()
        return self._backend

    def record(self, recipient_email: str, table_name: str, now_ms: Optional[int] = None) -> AuditRecord:
        """
        감사 기록 1건 추가

        Args:
            recipient_email: 상태 이메일 수신인
            table_name: 감사 테이블명
            now_ms: 기록 시각 (epoch ms, 테스트용)

        Returns:
            저장된 AuditRecord

        Raises:
            AuditError: 저장 실패
        """
        record = AuditRecord.create(recipient_email, now_ms=now_ms)
        logger.info(f"감사 기록 저장: {table_name} - {recipient_email}")

        self._get_backend().put_audit_record(table_name, record.to_item())
        return record

    def history(self, recipient_email: str, table_name: str) -> List[AuditRecord]:
        """수신인별 감사 기록 조회"""
        items = self._get_backend().list_audit_records(table_name, recipient_email)
        return [AuditRecord.from_item(item) for item in items]
