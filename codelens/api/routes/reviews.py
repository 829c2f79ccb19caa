import logging
from typing import Optional, Sequence

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from codelens.analyzer.analyzer import Analyzer
from codelens.analyzer.annotations import Annotation, AnnotationKind
from codelens.analyzer.dto import (
    Issue,
    IssueSeverity,
    Vulnerability,
    VulnerabilitySeverity,
)
from codelens.analyzer.render import build_review
from codelens.api.dependencies import get_analyzer
from codelens.api.dto import (
    AnnotateRequest,
    AnnotationResponse,
    CodeRequest,
    IssueCountsResponse,
    IssueModel,
    ReviewLineResponse,
    ReviewResponse,
    VulnerabilityModel,
)
from codelens.settings import settings
from codelens.utils.files import read_uploaded_source

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["reviews"])


def issue_from_model(model: IssueModel) -> Issue:
    return Issue(
        line=model.line,
        end_line=model.end_line,
        message=model.message,
        severity=IssueSeverity(model.severity),
    )


def vulnerability_from_model(model: VulnerabilityModel) -> Vulnerability:
    return Vulnerability(
        line=model.line,
        description=model.description,
        severity=VulnerabilitySeverity(model.severity),
        category=model.category,
        recommendation=model.recommendation,
    )


def annotation_response(annotation: Annotation) -> AnnotationResponse:
    payload = annotation.payload

    if annotation.kind is AnnotationKind.ISSUE:
        return AnnotationResponse(
            kind="issue",
            payload=IssueModel(
                line=payload.line,
                end_line=payload.end_line,
                message=payload.message,
                severity=payload.severity.value,
            ),
        )

    return AnnotationResponse(
        kind="vulnerability",
        payload=VulnerabilityModel(
            line=payload.line,
            description=payload.description,
            severity=payload.severity.value,
            category=payload.category,
            recommendation=payload.recommendation,
        ),
    )


def render_review_response(
        code: str,
        issues: Sequence[Issue],
        vulnerabilities: Sequence[Vulnerability],
        summary: Optional[str] = None,
) -> ReviewResponse:
    document = build_review(
        code,
        issues,
        vulnerabilities,
        summary=summary,
        threshold=settings.duplicate_threshold,
        containment_score=settings.containment_score,
    )

    return ReviewResponse(
        language=document.language.value,
        summary=document.summary,
        issue_counts=IssueCountsResponse(
            errors=document.issue_counts.errors,
            warnings=document.issue_counts.warnings,
            suggestions=document.issue_counts.suggestions,
            labels=document.issue_counts.labels(),
        ),
        vulnerability_counts=document.vulnerability_counts,
        lines=[
            ReviewLineResponse(
                number=line.number,
                text=line.text,
                html=line.html,
                annotations=[annotation_response(annotation) for annotation in line.annotations],
            )
            for line in document.lines
        ],
    )


def review_source(code: str, analyzer: Analyzer) -> ReviewResponse:
    analysis = analyzer.analyze(code)
    return render_review_response(code, analysis.issues, analysis.vulnerabilities, analysis.summary)


@router.post("")
def create_review(
        request: CodeRequest,
        analyzer: Analyzer = Depends(get_analyzer),
) -> ReviewResponse:
    if not request.code.strip():
        raise HTTPException(status_code=400, detail="Code is required")

    return review_source(request.code, analyzer)


@router.post("/upload")
def upload_review(
        source_file: UploadFile = File(...),
        analyzer: Analyzer = Depends(get_analyzer),
) -> ReviewResponse:
    try:
        code: str = read_uploaded_source(source_file.file)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    logger.info("Reviewing uploaded file '%s'", source_file.filename)
    return review_source(code, analyzer)


@router.post("/annotate")
def annotate_review(request: AnnotateRequest) -> ReviewResponse:
    return render_review_response(
        request.code,
        [issue_from_model(issue) for issue in request.issues],
        [vulnerability_from_model(vulnerability) for vulnerability in request.vulnerabilities],
        request.summary,
    )
