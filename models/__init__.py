from .extraction import ErrorResponse, ExtractionRequest, ExtractionResult

__all__ = ['ErrorResponse', 'ExtractionRequest', 'ExtractionResult',]
