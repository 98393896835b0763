#!/usr/bin/env python3
"""
로컬 실행 엔트리포인트
SNS 이벤트를 구성하여 Lambda 핸들러를 직접 호출

사용법:
  python run_local.py --url https://example.com/submission.zip --email user@example.com
  python run_local.py --url https://example.com/submission.zip --email user@example.com --name Alice
"""
import sys
import os
import argparse
import json
from datetime import datetime

# 프로젝트 루트를 PYTHONPATH에 추가
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def build_sns_event(url: str, email: str, name: str = "") -> dict:
    """SNS 트리거와 같은 형태의 이벤트 생성"""
    message = {"firstName": name, "email": email, "submissionUrl": url}
    return {
        "Records": [
            {
                "EventSource": "aws:sns",
                "Sns": {"Message": json.dumps(message)},
            }
        ]
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description='제출 파일 업로드 및 상태 메일 전송')
    parser.add_argument('--url', required=True, help='제출 파일 URL')
    parser.add_argument('--email', default='', help='상태 메일 수신인')
    parser.add_argument('--name', default='', help='제출자 이름')
    args = parser.parse_args(argv)

    # 로깅 설정 (파일 + 콘솔)
    from submission_relay.structured_logging import setup_logging
    setup_logging()

    import logging
    logger = logging.getLogger(__name__)

    logger.info(f"=== run_local.py 시작 (url={args.url}) ===")

    from submission_relay.config import Config
    from submission_relay.exceptions import ConfigurationError
    try:
        Config.validate()
    except ConfigurationError as e:
        logger.error(f"설정 검증 실패: {e}")
        return 1

    from lambda_handler import handler

    try:
        result = handler(build_sns_event(args.url, args.email, args.name), None)
    except Exception as e:
        print(f"[{datetime.now().isoformat()}] 실패: {e}")
        return 1

    body = json.loads(result.get('body', '{}'))
    logger.info(f"=== run_local.py 완료: statusCode={result.get('statusCode')} ===")

    print(f"[{datetime.now().isoformat()}] {body.get('outcome', 'Skipped')}: {body.get('message', '')}")
    return 0 if body.get('outcome') == 'Success' else 1


if __name__ == '__main__':
    sys.exit(main())
