"""
Company knowledge base for the support chat.

This package is responsible for:
- The KnowledgeChunk schema and its categories
- The bundled sample corpus, rendered with the configured company name
- Loading an alternative corpus from a JSONL file
"""
