"""
제출 파일 릴레이
SNS 알림으로 받은 URL의 zip 파일을 GCS에 업로드하고 결과를 메일로 통보
"""
from .models import InboundEvent, PipelineResult, RecipientSource, StatusOutcome
from .pipeline import SubmissionPipeline

__all__ = [
    "InboundEvent",
    "PipelineResult",
    "RecipientSource",
    "StatusOutcome",
    "SubmissionPipeline",
]
