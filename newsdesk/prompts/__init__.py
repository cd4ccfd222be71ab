from .article_templates import build_article_prompt

__all__ = ["build_article_prompt"]
