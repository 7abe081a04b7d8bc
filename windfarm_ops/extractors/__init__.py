from .csv_extractor import CSVExtractor

__all__ = ['CSVExtractor']
