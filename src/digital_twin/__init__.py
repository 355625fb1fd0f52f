"""Digital twin chat back-end: lexical retrieval, answer generation and owner notifications."""

__version__ = "1.0.0"
