from .pypdf_extractor import PypdfTextExtractor

__all__ = ["PypdfTextExtractor"]
