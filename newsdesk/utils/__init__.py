# Shared utilities for the newsroom

from newsdesk.utils.logging import configure_logging, get_logger
from newsdesk.utils.json_parser import strip_code_fences, parse_llm_json
from newsdesk.utils.datetime_utils import utc_now, press_date, masthead_date
from newsdesk.utils.async_bridge import run_sync

__all__ = [
    "configure_logging", "get_logger",
    "strip_code_fences", "parse_llm_json",
    "utc_now", "press_date", "masthead_date",
    "run_sync",
]
