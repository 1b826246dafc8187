"""Upload parse error classification 테스트."""

from __future__ import annotations

import pytest

from stdmeta.core.upload_errors import (
    UploadErrorCode,
    classify_upload_parse_error,
    no_valid_data_upload_error,
)


class TestClassifyUploadParseError:
    @pytest.mark.parametrize(
        ("message", "code"),
        [
            ("헤더가 올바르지 않습니다.", UploadErrorCode.HEADER_MISMATCH),
            ("필수 컬럼이 누락되었습니다: 표준단어명", UploadErrorCode.REQUIRED_FIELD_MISSING),
            ("참조 엔터티를 찾을 수 없습니다.", UploadErrorCode.REFERENCE_NOT_FOUND),
            ("유효한 데이터를 찾을 수 없습니다.", UploadErrorCode.PARSE_FAILED),
            ("알 수 없는 오류", UploadErrorCode.PARSE_FAILED),
        ],
    )
    def test_keyword_classification(self, message: str, code: UploadErrorCode) -> None:
        result = classify_upload_parse_error(message)
        assert result.code == code
        assert result.message == message

    def test_header_takes_precedence(self) -> None:
        result = classify_upload_parse_error(ValueError("필수 헤더 누락"))
        assert result.code == UploadErrorCode.HEADER_MISMATCH

    def test_exception_message(self) -> None:
        result = classify_upload_parse_error(RuntimeError("필수 값 누락"))
        assert result.code == UploadErrorCode.REQUIRED_FIELD_MISSING
        assert result.message == "필수 값 누락"

    @pytest.mark.parametrize("error", [None, "", "  ", ValueError(), 42])
    def test_fallback_message(self, error: object) -> None:
        result = classify_upload_parse_error(error)
        assert result.code == UploadErrorCode.PARSE_FAILED
        assert result.message == "Excel 파일 파싱 실패"

    def test_custom_fallback(self) -> None:
        result = classify_upload_parse_error(None, "업로드 실패")
        assert result.message == "업로드 실패"


class TestNoValidData:
    def test_default_message(self) -> None:
        result = no_valid_data_upload_error()
        assert result.code == UploadErrorCode.NO_VALID_DATA
        assert result.message == "파일에서 유효한 데이터를 찾을 수 없습니다."
