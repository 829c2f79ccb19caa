from openai.types.shared_params import ResponseFormatJSONSchema

_LINE_DESCRIPTION = (
    "1-based line number, counted exactly as in the enumerated source. "
    "Do not lose track of the line number and do not shift it."
)

REVIEW_RESULT_SCHEME: ResponseFormatJSONSchema = {
    "type": "json_schema",
    "json_schema": {
        "name": "ReviewResult",
        "description": "Line-anchored code review feedback: bugs, performance, security and best practices.",
        "strict": True,
        "schema": {
            "type": "object",
            "additionalProperties": False,
            "required": ["issues", "summary"],
            "properties": {
                "issues": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "additionalProperties": False,
                        "required": ["line", "endLine", "message", "severity"],
                        "properties": {
                            "line": {
                                "type": "integer",
                                "minimum": 1,
                                "description": f"Starting line of the issue. {_LINE_DESCRIPTION}",
                            },
                            "endLine": {
                                "type": ["integer", "null"],
                                "description": (
                                    "Last line of the issue when it spans several lines, "
                                    "otherwise null."
                                ),
                            },
                            "message": {
                                "type": "string",
                                "description": "Specific feedback: what is wrong and how to improve it.",
                            },
                            "severity": {
                                "type": "string",
                                "enum": ["error", "warning", "info"],
                            },
                        },
                    },
                },
                "summary": {
                    "type": ["string", "null"],
                    "description": "Optional 1-3 sentence overall assessment of the code.",
                },
            },
        },
    },
}

SECURITY_SCAN_RESULT_SCHEME: ResponseFormatJSONSchema = {
    "type": "json_schema",
    "json_schema": {
        "name": "SecurityScanResult",
        "description": "Security vulnerabilities found in the code, each anchored to one line.",
        "strict": True,
        "schema": {
            "type": "object",
            "additionalProperties": False,
            "required": ["vulnerabilities"],
            "properties": {
                "vulnerabilities": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "additionalProperties": False,
                        "required": ["line", "description", "severity", "type", "recommendation"],
                        "properties": {
                            "line": {
                                "type": "integer",
                                "minimum": 1,
                                "description": _LINE_DESCRIPTION,
                            },
                            "description": {"type": "string"},
                            "severity": {
                                "type": "string",
                                "enum": ["critical", "high", "medium", "low", "info"],
                            },
                            "type": {
                                "type": "string",
                                "description": "Vulnerability category, e.g. 'SQL Injection' or 'XSS'.",
                            },
                            "recommendation": {
                                "type": "string",
                                "description": "Concrete remediation for this finding.",
                            },
                        },
                    },
                },
            },
        },
    },
}
