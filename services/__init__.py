"""
Business logic services.

Each service handles one stage of the quote pipeline.
"""

from services.keyword_expansion_service import KeywordExpansionService, KeywordExpansionTable
from services.catalog_prefilter_service import CatalogPreFilterService
from services.match_request_service import MatchRequest, MatchRequestBuilder
from services.claude_matcher_service import ClaudeMatcherService, RetryPolicy, get_claude_matcher_service
from services.override_rule_service import OverrideRuleEngine
from services.quote_summary_service import summarize
from services.list_extraction_service import ListExtractionService, get_list_extraction_service
from services.quote_service import QuoteService, get_quote_service

__all__ = [
    "KeywordExpansionService",
    "KeywordExpansionTable",
    "CatalogPreFilterService",
    "MatchRequest",
    "MatchRequestBuilder",
    "ClaudeMatcherService",
    "RetryPolicy",
    "get_claude_matcher_service",
    "OverrideRuleEngine",
    "summarize",
    "ListExtractionService",
    "get_list_extraction_service",
    "QuoteService",
    "get_quote_service",
]
