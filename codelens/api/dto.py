from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CodeRequest(BaseModel):
    code: str


class IssueModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    line: int
    end_line: Optional[int] = Field(default=None, alias="endLine")
    message: str
    severity: Literal["error", "warning", "info"]


class VulnerabilityModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    line: int
    description: str
    severity: Literal["critical", "high", "medium", "low", "info"]
    category: str = Field(alias="type")
    recommendation: str = ""


class AnnotateRequest(BaseModel):
    code: str
    issues: list[IssueModel] = Field(default_factory=list)
    vulnerabilities: list[VulnerabilityModel] = Field(default_factory=list)
    summary: Optional[str] = None


class AnnotationResponse(BaseModel):
    kind: Literal["issue", "vulnerability"]
    payload: IssueModel | VulnerabilityModel


class ReviewLineResponse(BaseModel):
    number: int
    text: str
    html: str
    annotations: list[AnnotationResponse]


class IssueCountsResponse(BaseModel):
    errors: int
    warnings: int
    suggestions: int
    labels: list[str]


class ReviewResponse(BaseModel):
    language: str
    summary: Optional[str] = None
    issue_counts: IssueCountsResponse
    vulnerability_counts: dict[str, int]
    lines: list[ReviewLineResponse]


class LanguageResponse(BaseModel):
    language: str


class HealthResponse(BaseModel):
    ok: bool
    app_name: str
    app_env: str
