from .json_repository import JsonKnowledgeBaseRepository

__all__ = ["JsonKnowledgeBaseRepository"]
