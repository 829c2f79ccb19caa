from fastapi import APIRouter

from codelens.analyzer.language import classify
from codelens.api.dto import CodeRequest, LanguageResponse

router = APIRouter(prefix="/languages", tags=["languages"])


@router.post("/detect")
def detect_language(request: CodeRequest) -> LanguageResponse:
    return LanguageResponse(language=classify(request.code).value)
