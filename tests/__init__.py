"""
Insight Times Test Suite.

Test modules:
- test_config: Configuration validation
- test_article_state: Article, citation and snapshot models
- test_utils: JSON cleanup, dates, async bridge, logging
- test_credential_gate: API key lookup and selection
- test_gemini_reporter: Search-grounded article generation
- test_nano_banana_client: Illustration generation and fallback
- test_newsroom: Session state machine
"""
