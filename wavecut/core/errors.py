"""
Error taxonomy for WaveCut operations.

Every error carries a ``user_message`` suitable for a message box; the
exception text itself holds the technical detail for the log.
"""


class EditorError(Exception):
    """Base class for failures surfaced at an operation boundary."""
    user_message = "The operation failed."


class DecodeFailure(EditorError):
    user_message = "Failed to load audio. Make sure the file format is supported."


class ExtractionFailure(EditorError):
    user_message = (
        "Could not extract audio from the video. The format may be unsupported, "
        "the file may be damaged, or it may have no audio track."
    )


class NoAudioTrack(ExtractionFailure):
    user_message = "The video has no audio track."


class ExtractionTimeout(ExtractionFailure):
    user_message = "Timed out while reading the video metadata."


class InvalidSelectionForExport(EditorError):
    user_message = "Select a range of audio before exporting a selection."


class NoAssetLoaded(EditorError):
    user_message = "Import an audio file first."


class GenericExportFailure(EditorError):
    user_message = "Export failed."
