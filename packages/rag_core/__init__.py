"""
Core keyword retrieval logic for the support chat.

This package contains:
- Query term extraction
- Lexical chunk scoring and ranking
- Question type detection
- Formatting of ranked chunks into prompt context
"""
