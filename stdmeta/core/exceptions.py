"""Custom exception hierarchy for the naming-standard engine.

검증 결과(불일치, 중복, 미매핑)는 예외가 아니라 데이터(issue record)로 반환합니다.
예외는 다음 두 채널에만 사용합니다.

Exception Categories:
    - Storage (Collaborator I/O): 파일 없음, JSON 파싱 실패 등
    - Contract (Fail Fast): 잘못된 컨텍스트 형태 등 호출자 측 프로그래밍 오류
"""


class StdMetaError(Exception):
    """모든 stdmeta 예외의 기본 클래스.

    이 예외를 직접 발생시키지 말고, 하위 클래스를 사용하세요.

    Attributes:
        message: 에러 메시지
        context: 추가 컨텍스트 정보 (디버깅용)
    """

    def __init__(self, message: str, *, context: dict[str, object] | None = None) -> None:
        """StdMetaError 초기화.

        Args:
            message: 에러 메시지
            context: 추가 컨텍스트 정보 (선택)
        """
        super().__init__(message)
        self.message = message
        self.context: dict[str, object] = context or {}

    def __str__(self) -> str:
        """에러 메시지와 컨텍스트를 포함한 문자열 반환."""
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


# =============================================================================
# Storage Errors (Collaborator I/O)
# =============================================================================


class StorageError(StdMetaError):
    """저장소 관련 오류 (JSON/YAML 파일 읽기/쓰기 실패 등).

    검증 결과와 섞이지 않도록 별도 채널로 전달됩니다.

    Example:
        >>> raise StorageError(
        ...     "Failed to write data file",
        ...     context={"path": "static/data/term/term.json"}
        ... )
    """


class DataFileNotFoundError(StorageError):
    """요청한 데이터 파일이 존재하지 않음."""


class DataParseError(StorageError):
    """데이터 파일의 JSON 또는 스키마가 올바르지 않음."""


# =============================================================================
# Contract Errors (Unrecoverable - Fail Fast)
# =============================================================================


class ContextShapeError(StdMetaError):
    """검증기/동기화 계획기에 전달된 컨텍스트 형태가 잘못됨.

    호출자 측 프로그래밍 오류이므로 재시도하지 않습니다.

    Example:
        >>> raise ContextShapeError(
        ...     "MappingContext.tables must be a list",
        ...     context={"got": "dict"}
        ... )
    """


# =============================================================================
# Utility Functions
# =============================================================================


def add_context_note(exc: Exception, note: str) -> None:
    """예외에 컨텍스트 노트 추가 (Python 3.11+ add_note).

    원본 Traceback을 보존하면서 디버깅 정보를 추가합니다.

    Args:
        exc: 예외 객체
        note: 추가할 노트 문자열

    Example:
        >>> try:
        ...     registry.load(DataType.TERM, "term.json")
        ... except StorageError as e:
        ...     add_context_note(e, "while building validation report")
        ...     raise
    """
    exc.add_note(note)
