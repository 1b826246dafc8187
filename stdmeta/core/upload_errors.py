"""Upload parse error classification.

XLSX 업로드 파서가 던진 메시지를 표준 에러 코드로 분류합니다.

키워드 매칭 순서(헤더 → 필수 누락 → 참조 없음)는 기존 동작을 그대로 유지합니다.
"필수"와 "헤더"가 동시에 포함된 메시지는 항상 HEADER_MISMATCH로 분류되며,
이는 알려진 분류 모호성입니다.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

_DEFAULT_PARSE_MESSAGE = "Excel 파일 파싱 실패"
_DEFAULT_NO_DATA_MESSAGE = "파일에서 유효한 데이터를 찾을 수 없습니다."


class UploadErrorCode(StrEnum):
    """업로드 에러 코드."""

    HEADER_MISMATCH = "HEADER_MISMATCH"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    REFERENCE_NOT_FOUND = "REFERENCE_NOT_FOUND"
    NO_VALID_DATA = "NO_VALID_DATA"
    PARSE_FAILED = "PARSE_FAILED"


class StandardUploadError(BaseModel):
    """분류된 업로드 에러."""

    model_config = ConfigDict(frozen=True)

    code: UploadErrorCode = Field(description="에러 코드")
    message: str = Field(description="원본 메시지")


def _normalize_message(error: object, fallback: str) -> str:
    if isinstance(error, Exception) and str(error).strip():
        return str(error)
    if isinstance(error, str) and error.strip():
        return error
    return fallback


def classify_upload_parse_error(
    error: object, fallback_message: str = _DEFAULT_PARSE_MESSAGE
) -> StandardUploadError:
    """파서 에러 메시지를 키워드 기반으로 분류.

    Args:
        error: 예외 객체 또는 메시지 문자열
        fallback_message: 메시지가 비어 있을 때 사용할 기본 메시지

    Returns:
        StandardUploadError
    """
    message = _normalize_message(error, fallback_message)
    normalized = message.lower()

    if "헤더" in normalized:
        return StandardUploadError(code=UploadErrorCode.HEADER_MISMATCH, message=message)
    if "필수" in normalized and "누락" in normalized:
        return StandardUploadError(code=UploadErrorCode.REQUIRED_FIELD_MISSING, message=message)
    if "찾을 수 없습니다" in normalized and "유효한" not in normalized:
        return StandardUploadError(code=UploadErrorCode.REFERENCE_NOT_FOUND, message=message)

    return StandardUploadError(code=UploadErrorCode.PARSE_FAILED, message=message)


def no_valid_data_upload_error(message: str = _DEFAULT_NO_DATA_MESSAGE) -> StandardUploadError:
    """유효 데이터 없음 에러 생성."""
    return StandardUploadError(code=UploadErrorCode.NO_VALID_DATA, message=message)
