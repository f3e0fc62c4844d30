"""
WaveCut - select, preview and export ranges of an audio recording.
"""
__version__ = "0.1.0"
