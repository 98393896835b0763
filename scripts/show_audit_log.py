#!/usr/bin/env python3
"""
감사 기록 조회 CLI 도구

사용법:
  python scripts/show_audit_log.py <email>              # DYNAMODB_TABLE의 수신인 기록
  python scripts/show_audit_log.py <email> <table>      # 지정 테이블의 수신인 기록
"""
import os
import sys
from datetime import datetime, timezone

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from submission_relay.audit_tracker import AuditTracker
from submission_relay.config import Config
from submission_relay.exceptions import AuditError


def print_record(record):
    """감사 기록 출력"""
    sent_at = datetime.fromtimestamp(record.timestamp / 1000, tz=timezone.utc).isoformat()
    print(f"  - {record.id:50s} | {sent_at}")


def main(argv):
    if not argv or len(argv) > 2:
        print(__doc__)
        return 1

    email = argv[0]
    table_name = argv[1] if len(argv) > 1 else Config.DYNAMODB_TABLE
    if not table_name:
        print("✗ DYNAMODB_TABLE 환경변수 또는 테이블명 인자가 필요합니다")
        return 1

    try:
        records = AuditTracker().history(email, table_name)
    except AuditError as e:
        print(f"✗ 조회 실패: {e}")
        return 1

    print(f"\n{email} 감사 기록 ({len(records)}건, 테이블: {table_name}):")
    print("=" * 80)
    for record in records:
        print_record(record)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
