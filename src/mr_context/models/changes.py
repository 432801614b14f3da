"""
Change Data Models

브랜치 비교 분석 결과를 표현하는 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from pydantic import BaseModel, validator


DECLARATION_KINDS = {'function', 'variable', 'class', 'interface', 'type'}


@dataclass(frozen=True)
class Position:
    """소스 파일 내 위치 (line은 1부터, column은 0부터)"""
    line: int
    column: int

    def __post_init__(self):
        """데이터 검증"""
        if self.line < 1:
            raise ValueError("Line numbers start at 1")
        if self.column < 0:
            raise ValueError("Column must be non-negative")


@dataclass(frozen=True)
class Span:
    """구문 요소의 시작/끝 위치"""
    start: Position
    end: Position

    def __post_init__(self):
        """데이터 검증"""
        if (self.end.line, self.end.column) < (self.start.line, self.start.column):
            raise ValueError("Span end cannot precede span start")

    def overlaps_lines(self, first: int, last: int) -> bool:
        """주어진 라인 범위와 겹치는지 확인"""
        return self.start.line <= last and first <= self.end.line


@dataclass(frozen=True)
class Declaration:
    """파일 내 이름 있는 선언 (함수, 변수, 클래스, 타입)"""
    kind: str  # 'function', 'variable', 'class', 'interface', 'type'
    name: str
    span: Span

    def __post_init__(self):
        """데이터 검증"""
        if self.kind not in DECLARATION_KINDS:
            raise ValueError(f"Invalid declaration kind: {self.kind}")
        if not self.name:
            raise ValueError("Declaration name cannot be empty")


@dataclass(frozen=True)
class FunctionContext:
    """변경된 함수의 원본 소스"""
    name: str
    content: str
    span: Span


@dataclass(frozen=True)
class FileContext:
    """변경된 파일 하나의 선언 정보"""
    path: str
    declarations: List[Declaration] = field(default_factory=list)
    modified_functions: List[FunctionContext] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증"""
        if not self.path:
            raise ValueError("File path cannot be empty")


@dataclass(frozen=True)
class DiffHunk:
    """unified diff의 개별 hunk"""
    content: str
    old_start: int
    old_line_count: int
    new_start: int
    new_line_count: int

    def __post_init__(self):
        """데이터 검증"""
        if self.old_start < 0 or self.new_start < 0:
            raise ValueError("Line numbers must be non-negative")
        if self.old_line_count < 0 or self.new_line_count < 0:
            raise ValueError("Line counts must be non-negative")

    @property
    def new_line_range(self) -> Tuple[int, int]:
        """새 파일 기준 라인 범위 (삭제만 있는 hunk는 new_start 한 줄)"""
        if self.new_line_count == 0:
            return self.new_start, self.new_start
        return self.new_start, self.new_start + self.new_line_count - 1


@dataclass(frozen=True)
class DiffContext:
    """변경된 파일 하나의 diff"""
    file_path: str
    diff: str
    hunks: List[DiffHunk] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증"""
        if not self.file_path:
            raise ValueError("File path cannot be empty")


@dataclass(frozen=True)
class AnalysisResult:
    """분석 결과 전체 (files와 diffs는 같은 순서로 정렬됨)"""
    files: List[FileContext] = field(default_factory=list)
    diffs: List[DiffContext] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증"""
        if len(self.files) != len(self.diffs):
            raise ValueError("files and diffs must have the same length")
        for file_context, diff_context in zip(self.files, self.diffs):
            if file_context.path != diff_context.file_path:
                raise ValueError(
                    f"Misaligned result: {file_context.path} != {diff_context.file_path}"
                )

    @property
    def total_hunks(self) -> int:
        """전체 hunk 수"""
        return sum(len(d.hunks) for d in self.diffs)


# Pydantic model for CLI input validation
class ComparisonOptions(BaseModel):
    """분석 실행 옵션"""
    repo_path: str = "."
    branch: Optional[str] = None
    base: Optional[str] = None
    output_path: Optional[str] = None
    copy_to_clipboard: bool = False
    verbose: bool = False
    raw: bool = False

    class Config:
        frozen = True

    @validator('branch', 'base')
    def validate_ref(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Ref names cannot be blank')
        return v

    @validator('repo_path')
    def validate_repo_path(cls, v):
        if not v.strip():
            raise ValueError('Repository path cannot be blank')
        return v

    @property
    def target_ref(self) -> str:
        """비교 대상 ref (브랜치 미지정 시 HEAD)"""
        return self.branch or "HEAD"
