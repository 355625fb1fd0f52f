from .openrouter_adapter import OpenRouterAnswerGenerator
from .scoped_llm import ScopedAnswerGenerator
from .template_llm import TemplateAnswerGenerator

__all__ = ["OpenRouterAnswerGenerator", "ScopedAnswerGenerator", "TemplateAnswerGenerator"]
