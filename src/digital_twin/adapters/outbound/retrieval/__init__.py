from .index_retriever import IndexRetriever
from .static_retriever import StaticRetriever

__all__ = ["IndexRetriever", "StaticRetriever"]
