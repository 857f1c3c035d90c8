"""Core constants used across topscores modules.

This module centralizes record-format limits and runtime defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

SCORE_DOCUMENT_SEPARATOR = ":"
DOCUMENT_ID_FIELD = "id"
MIN_SCORE = 0
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
DEFAULT_ENCODING = "utf-8"
BYTE_ORDER_MARK = "\ufeff"
DEFAULT_DISTINCT_SCORES = False
DEFAULT_LOG_LEVEL = "warning"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
TRUE_ENV_VALUES = ("1", "true", "yes", "on")
FALSE_ENV_VALUES = ("0", "false", "no", "off")
RESULT_JSON_INDENT = 2

FAILURE_MALFORMED_SCORE = "malformed_score"
FAILURE_SCORE_OUT_OF_RANGE = "score_out_of_range"
FAILURE_NEGATIVE_SCORE = "negative_score"
FAILURE_MALFORMED_DOCUMENT = "malformed_document"
FAILURE_DOCUMENT_NOT_OBJECT = "document_not_object"
FAILURE_MISSING_ID = "missing_id"
