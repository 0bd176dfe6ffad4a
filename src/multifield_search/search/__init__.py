"""
Record search and ranking package.

This package provides a pure-Python, index-free search stack:
- analyzers: Text normalization and query tokenization
- fuzzy: Levenshtein distance and similarity ratio
- matching: Prioritized single-field match strategies
- schema: Weighted field descriptors and schemas
- models: Search options and result value objects
- ranker: Multi-field, multi-term ranking entry points
- presets: Field schemas for common business records
"""
