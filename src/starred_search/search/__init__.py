"""
Search indexing and ranking package.

This package provides a pure-Python in-memory search stack:
- analyzers: Alphanumeric tokenizer and keyword normalization
- stats: IDF and BM25+ scoring helpers
- engine: Field-weighted inverted index and ranking
"""
