import hashlib
import json
import logging
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from time import time
from typing import Any, Dict, List, Tuple, TypeVar

from openai import OpenAI, OpenAIError
from openai.types.chat import (
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam,
)
from serde import SerdeError, from_dict, to_dict

from codelens.analyzer.dto import (
    CodeAnalysis,
    Issue,
    IssueSeverity,
    ReviewResult,
    SecurityScanResult,
)
from codelens.analyzer.language import classify
from codelens.analyzer.prompt import REVIEW_PROMPT, REVIEW_USER_TEMPLATE, SECURITY_SCAN_PROMPT
from codelens.analyzer.scheme import REVIEW_RESULT_SCHEME, SECURITY_SCAN_RESULT_SCHEME
from codelens.settings import settings

logger = logging.getLogger(__name__)

ResultType = TypeVar("ResultType")

ANALYSIS_FAILED_MESSAGE = "An error occurred while analyzing the code. Please try again."

# Everything a broken model response or transport can raise on the way to a typed result.
ANALYSIS_ERRORS = (OpenAIError, SerdeError, ValueError, TypeError, KeyError)


def enumerate_file_lines(content: str) -> str:
    return "\n".join(f"{index + 1}: {line}" for index, line in enumerate(content.split("\n")))


def content_hash(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def fallback_review_result() -> ReviewResult:
    return ReviewResult(
        issues=[Issue(line=1, message=ANALYSIS_FAILED_MESSAGE, severity=IssueSeverity.ERROR)],
    )


class Analyzer:
    def __init__(
            self,
            model: str | None = None,
            client: OpenAI | None = None,
            use_cache: bool = True,
            cache_size: int | None = None,
    ) -> None:
        self.model = model or settings.analyzer_model
        self.client = client or OpenAI(
            api_key=settings.analyzer_api_key,
            base_url=settings.analyzer_base_url or None,
        )
        self.use_cache = use_cache
        self.cache_size = settings.analyzer_cache_size if cache_size is None else cache_size
        self.review_cache: "OrderedDict[str, ReviewResult]" = OrderedDict()
        self.security_cache: "OrderedDict[str, SecurityScanResult]" = OrderedDict()

    def analyze(self, code: str) -> CodeAnalysis:
        """Run the code review and the security scan side by side and combine their results."""
        logger.info("Starting analysis of %d lines with model '%s'...", code.count("\n") + 1, self.model)
        analysis_start_time = time()

        with ThreadPoolExecutor(max_workers=2) as executor:
            review_future = executor.submit(self.review_code, code)
            security_future = executor.submit(self.scan_security, code)

            review_result: ReviewResult = review_future.result()
            security_result: SecurityScanResult = security_future.result()

        logger.info(
            "Analysis completed in %.2f seconds. Issues: %d, vulnerabilities: %d",
            time() - analysis_start_time,
            len(review_result.issues),
            len(security_result.vulnerabilities),
        )
        return CodeAnalysis(
            issues=review_result.issues,
            vulnerabilities=security_result.vulnerabilities,
            summary=review_result.summary,
        )

    # -------------------------
    # Analysis calls
    # -------------------------

    def review_code(self, code: str) -> ReviewResult:
        cache_key = content_hash(code)
        if self.use_cache and cache_key in self.review_cache:
            logger.info("Using cached review result")
            self.review_cache.move_to_end(cache_key)
            return self.review_cache[cache_key]

        try:
            elapsed, review_text = self.timed_chat_completion(
                step_name="Code review",
                messages=[
                    ChatCompletionSystemMessageParam(content=REVIEW_PROMPT, role="system"),
                    ChatCompletionUserMessageParam(content=self.build_user_content(code), role="user"),
                ],
                response_format=REVIEW_RESULT_SCHEME,
                temperature=0.2,
            )
            review_result: ReviewResult = self.parse_typed_json(
                raw_text=review_text,
                target_type=ReviewResult,
                error_context="review JSON",
            )
        except ANALYSIS_ERRORS:
            logger.exception("Code review with model '%s' failed", self.model)
            return fallback_review_result()

        logger.info("Code review completed in %.2f seconds. Issues found: %d", elapsed, len(review_result.issues))

        if self.use_cache:
            self.remember(self.review_cache, cache_key, review_result)
        return review_result

    def scan_security(self, code: str) -> SecurityScanResult:
        cache_key = content_hash(code)
        if self.use_cache and cache_key in self.security_cache:
            logger.info("Using cached security scan result")
            self.security_cache.move_to_end(cache_key)
            return self.security_cache[cache_key]

        try:
            elapsed, scan_text = self.timed_chat_completion(
                step_name="Security scan",
                messages=[
                    ChatCompletionSystemMessageParam(content=SECURITY_SCAN_PROMPT, role="system"),
                    ChatCompletionUserMessageParam(content=self.build_user_content(code), role="user"),
                ],
                response_format=SECURITY_SCAN_RESULT_SCHEME,
                temperature=0.1,
            )
            scan_result: SecurityScanResult = self.parse_typed_json(
                raw_text=scan_text,
                target_type=SecurityScanResult,
                error_context="security scan JSON",
            )
        except ANALYSIS_ERRORS:
            logger.exception("Security scan with model '%s' failed", self.model)
            return SecurityScanResult(vulnerabilities=[])

        logger.info(
            "Security scan completed in %.2f seconds. Vulnerabilities found: %d",
            elapsed,
            len(scan_result.vulnerabilities),
        )

        if self.use_cache:
            self.remember(self.security_cache, cache_key, scan_result)
        return scan_result

    # -------------------------
    # Shared helpers
    # -------------------------

    def remember(self, cache: "OrderedDict[str, ResultType]", key: str, result: ResultType) -> None:
        cache[key] = result
        cache.move_to_end(key)
        while len(cache) > self.cache_size:
            evicted_key, _ = cache.popitem(last=False)
            logger.debug("Evicted cached result %s", evicted_key[:12])

    def build_user_content(self, code: str) -> str:
        return REVIEW_USER_TEMPLATE.format(
            language=classify(code).value,
            code=enumerate_file_lines(code),
        )

    def timed_chat_completion(
            self,
            step_name: str,
            messages: List[ChatCompletionSystemMessageParam | ChatCompletionUserMessageParam],
            response_format,
            temperature: float
    ) -> Tuple[float, str]:
        step_start_time: float = time()

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            response_format=response_format,
            temperature=temperature,
            timeout=settings.analyzer_timeout,
        )

        elapsed_seconds: float = time() - step_start_time
        message_content: str | None = response.choices[0].message.content
        if response.usage is not None:
            logger.info("Step '%s' used %d completion tokens", step_name, response.usage.completion_tokens)

        if message_content is None:
            raise ValueError(f"{step_name} returned empty message content.")

        return elapsed_seconds, message_content

    def parse_typed_json(self, raw_text: str, target_type: type[ResultType], error_context: str) -> ResultType:
        try:
            parsed_json: Dict[str, Any] = json.loads(raw_text)
        except ValueError as exception:
            logger.error("Failed to parse %s: %s", error_context, exception)
            logger.info("Raw model response content: %s", raw_text)
            raise

        try:
            typed_result: ResultType = from_dict(target_type, parsed_json)
        except ANALYSIS_ERRORS as exception:
            logger.error("Failed to convert %s into %s: %s", error_context, target_type.__name__, exception)
            logger.info("Parsed JSON payload: %s", json.dumps(parsed_json, indent=2))
            raise

        logger.debug("%s: %s", error_context, json.dumps(to_dict(typed_result), indent=2))
        return typed_result
