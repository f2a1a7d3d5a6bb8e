"""Exception hierarchy for the analysis pipeline."""


class AntennaAnalyzerError(Exception):
    """Base class for every error raised by antenna_analyzer."""


class InvalidImageError(AntennaAnalyzerError):
    """The selected file is not an image."""


class ImageEncodingError(AntennaAnalyzerError):
    """The image could not be read for encoding."""


class AnalysisFailedError(AntennaAnalyzerError):
    """The remote call failed or returned no text."""


class AnalysisInProgressError(AntennaAnalyzerError):
    """An analysis is already running for this session."""
