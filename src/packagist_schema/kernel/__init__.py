"""Decoding kernel: minified arrays, release models, aggregation, registry root."""
