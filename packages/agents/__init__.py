"""
Support agent orchestration.

Builds grounded conversations from retrieved context and sends them to the
completion provider.
"""
