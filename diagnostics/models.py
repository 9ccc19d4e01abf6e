"""
Data models for the Error Oracle HTTP API.
Request bodies mirror what the editor host already has: the document identity,
a cursor/hover position and a snapshot of that document's diagnostics.
"""
from typing import List, Optional, Union
from pydantic import BaseModel, Field, field_validator

from diagnostics.types import CommandStatus, Diagnostic, DocumentContext, Position, Range, Severity


class PositionModel(BaseModel):
    line: int = Field(ge=0)
    character: int = Field(ge=0)

    def to_position(self) -> Position:
        return Position(line=self.line, character=self.character)

    @classmethod
    def from_position(cls, position: Position) -> "PositionModel":
        return cls(line=position.line, character=position.character)


class RangeModel(BaseModel):
    start: PositionModel
    end: PositionModel

    def to_range(self) -> Range:
        return Range(start=self.start.to_position(), end=self.end.to_position())

    @classmethod
    def from_range(cls, range_: Range) -> "RangeModel":
        return cls(
            start=PositionModel.from_position(range_.start),
            end=PositionModel.from_position(range_.end),
        )


class DiagnosticModel(BaseModel):
    """Host diagnostic. Severity accepts names ("error") or host codes (0-3)."""
    message: str
    severity: Severity = Severity.ERROR
    range: RangeModel
    source: Optional[str] = None
    code: Optional[Union[str, int]] = None

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value):
        return Severity.parse(value)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            message=self.message,
            severity=self.severity,
            range=self.range.to_range(),
            source=self.source,
            code=None if self.code is None else str(self.code),
        )

    @classmethod
    def from_diagnostic(cls, diagnostic: Diagnostic) -> "DiagnosticModel":
        return cls(
            message=diagnostic.message,
            severity=diagnostic.severity,
            range=RangeModel.from_range(diagnostic.range),
            source=diagnostic.source,
            code=diagnostic.code,
        )


class DocumentModel(BaseModel):
    uri: str
    language_id: str

    def to_document(self) -> DocumentContext:
        return DocumentContext(uri=self.uri, language_id=self.language_id)


class ExplainRequest(BaseModel):
    message: str
    language_id: str


class ExplainResponse(BaseModel):
    explanation: str
    matched: bool  # False when the fallback explanation was used
    language_id: str
    search_url: str


class CommandRequest(BaseModel):
    """Explain-error command input. document/position are null without an active editor."""
    document: Optional[DocumentModel] = None
    position: Optional[PositionModel] = None
    diagnostics: List[DiagnosticModel] = []


class CommandAction(BaseModel):
    title: str
    url: str


class CommandResponse(BaseModel):
    status: CommandStatus
    notice: Optional[str] = None
    explanation: Optional[str] = None
    diagnostic: Optional[DiagnosticModel] = None
    modal: bool = False
    actions: List[CommandAction] = []


class HoverRequest(BaseModel):
    document: DocumentModel
    position: PositionModel
    diagnostics: List[DiagnosticModel] = []


class HoverModel(BaseModel):
    contents: str  # Markdown
    is_trusted: bool
    range: RangeModel


class HoverResponse(BaseModel):
    hover: Optional[HoverModel] = None


class RuleModel(BaseModel):
    language: str
    pattern: str
    flags: str
    explanation: str
