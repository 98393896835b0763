"""
SQLite 스토리지 백엔드 구현
로컬 실행 환경에서 SQLite를 사용하여 DynamoDB를 대체
"""

import logging
import sqlite3
import os
from typing import Dict, List, Optional

from ..exceptions import AuditError
from .base import AuditBackend

logger = logging.getLogger(__name__)


class SQLiteBackend(AuditBackend):
    """SQLite 감사 기록 백엔드 (DynamoDB 테이블명은 table_name 컬럼으로 구분)"""

    def __init__(self, db_path: Optional[str] = None):
        """SQLiteBackend 초기화 (경로 미지정 시 Config.DB_PATH)"""
        self._connection = None
        self._tables_created = False

        if db_path is None:
            from ..config import Config

            db_path = Config.DB_PATH

        self.db_path = db_path

    def _get_connection(self):
        """Lazy connection: DB 커넥션 생성 (이미 생성된 경우 재사용)"""
        if self._connection is None:
            # 데이터베이스 디렉토리 자동 생성
            db_dir = os.path.dirname(self.db_path)
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)

            self._connection = sqlite3.connect(self.db_path, timeout=30.0)
            logger.info(f"SQLite DB 연결: {self.db_path}")

            if not self._tables_created:
                self._create_tables_impl()

        return self._connection

    def _create_tables_impl(self):
        """테이블 자동 생성"""
        cursor = self._connection.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS audit_log (
                table_name TEXT NOT NULL,
                id TEXT NOT NULL,
                user_email TEXT NOT NULL,
                timestamp INTEGER NOT NULL,
                PRIMARY KEY (table_name, id)
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_audit_log_email
            ON audit_log(table_name, user_email)
        """)

        self._connection.commit()
        self._tables_created = True
        logger.info("SQLite 테이블 생성 완료")

    def put_audit_record(self, table_name: str, item: Dict) -> None:
        """감사 기록 저장"""
        try:
            conn = self._get_connection()
            conn.execute(
                """
                INSERT INTO audit_log (table_name, id, user_email, timestamp)
                VALUES (?, ?, ?, ?)
            """,
                (table_name, item["id"], item["UserEmail"], int(item["Timestamp"])),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"SQLite 감사 기록 저장 실패: {e}")
            raise AuditError(f"Failed to write audit record to {table_name}: {e}") from e

        logger.info(f"SQLite 감사 기록 저장 완료: {item['id']}")

    def list_audit_records(self, table_name: str, recipient_email: str) -> List[Dict]:
        """수신인별 감사 기록 조회"""
        try:
            cursor = self._get_connection().cursor()
            cursor.execute(
                """
                SELECT id, user_email, timestamp FROM audit_log
                WHERE table_name = ? AND user_email = ?
                ORDER BY timestamp ASC
            """,
                (table_name, recipient_email),
            )
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"SQLite 감사 기록 조회 실패: {e}")
            raise AuditError(f"Failed to read audit records from {table_name}: {e}") from e

        return [
            {"id": row[0], "UserEmail": row[1], "Timestamp": row[2]}
            for row in rows
        ]

    def close(self):
        """커넥션 종료"""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            self._tables_created = False
