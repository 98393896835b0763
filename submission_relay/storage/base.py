from abc import ABC, abstractmethod
from typing import Dict, List


class AuditBackend(ABC):
    """감사 기록 스토리지 백엔드 추상 인터페이스"""

    @abstractmethod
    def put_audit_record(self, table_name: str, item: Dict) -> None:
        """
        감사 기록 1건 추가 (append-only).
        저장 실패 시 AuditError 발생
        """
        ...

    @abstractmethod
    def list_audit_records(self, table_name: str, recipient_email: str) -> List[Dict]:
        """수신인별 감사 기록 조회 (Timestamp 오름차순)"""
        ...
