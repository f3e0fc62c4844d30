"""
Tests for 16-bit PCM WAV encoding.
"""
import io
import struct

import numpy as np
import pytest
import soundfile as sf

from wavecut.core.wav_encoder import (HEADER_SIZE, encode_wav, float_to_pcm16,
                                      iter_wav_chunks, wav_header)


def parse_header(payload: bytes) -> dict:
    fields = struct.unpack('<4sI4s4sIHHIIHH4sI', payload[:HEADER_SIZE])
    keys = ('riff', 'riff_size', 'wave', 'fmt', 'fmt_size', 'format', 'channels',
            'samplerate', 'byte_rate', 'block_align', 'bits', 'data', 'data_size')
    return dict(zip(keys, fields))


class TestHeader:
    def test_is_44_bytes(self):
        assert len(wav_header(0, 1, 44100)) == 44

    def test_fields(self):
        header = parse_header(wav_header(1000, 2, 48000))
        assert header['riff'] == b'RIFF'
        assert header['wave'] == b'WAVE'
        assert header['fmt'] == b'fmt '
        assert header['fmt_size'] == 16
        assert header['format'] == 1
        assert header['channels'] == 2
        assert header['samplerate'] == 48000
        assert header['byte_rate'] == 48000 * 4
        assert header['block_align'] == 4
        assert header['bits'] == 16
        assert header['data'] == b'data'
        assert header['data_size'] == 4000
        assert header['riff_size'] == 36 + 4000


class TestSampleConversion:
    def test_asymmetric_scaling_and_clamping(self):
        samples = np.array([-1.0, -0.5, 0.0, 0.5, 1.0, 2.0, -2.0], dtype=np.float32)
        expected = [-32768, -16384, 0, 16383, 32767, 32767, -32768]
        assert float_to_pcm16(samples).tolist() == expected

    def test_truncates_toward_zero(self):
        samples = np.array([0.00002, -0.00002], dtype=np.float32)
        assert float_to_pcm16(samples).tolist() == [0, 0]

    def test_nan_becomes_silence(self):
        assert float_to_pcm16(np.array([np.nan], dtype=np.float32)).tolist() == [0]

    def test_little_endian_int16(self):
        assert float_to_pcm16(np.zeros(1, dtype=np.float32)).dtype == np.dtype('<i2')


class TestEncode:
    def test_empty_payload_is_header_only(self):
        payload = encode_wav(np.zeros((0, 1), dtype=np.float32), 44100)
        assert len(payload) == HEADER_SIZE
        assert parse_header(payload)['data_size'] == 0

    def test_total_size(self, sample_stereo_audio):
        payload = encode_wav(sample_stereo_audio, 44100)
        assert len(payload) == HEADER_SIZE + 44100 * 2 * 2

    def test_stereo_is_interleaved(self):
        data = np.array([[0.5, -0.5], [1.0, -1.0]], dtype=np.float32)
        body = np.frombuffer(encode_wav(data, 8000)[HEADER_SIZE:], dtype='<i2')
        assert body.tolist() == [16383, -16384, 32767, -32768]

    def test_mono_vector_accepted(self, sample_mono_audio):
        payload = encode_wav(sample_mono_audio, 44100)
        assert parse_header(payload)['channels'] == 1

    def test_chunks_join_to_full_encoding(self, sample_stereo_audio):
        chunks = list(iter_wav_chunks(sample_stereo_audio, 44100, chunk_frames=1000))
        assert len(chunks[0]) == HEADER_SIZE
        assert len(chunks) == 1 + 45
        assert b''.join(chunks) == encode_wav(sample_stereo_audio, 44100)

    def test_readable_by_soundfile(self, sample_stereo_audio):
        payload = encode_wav(sample_stereo_audio, 44100)
        decoded, sr = sf.read(io.BytesIO(payload), dtype='int16', always_2d=True)
        assert sr == 44100
        assert decoded.shape == sample_stereo_audio.shape
        assert np.array_equal(decoded, float_to_pcm16(sample_stereo_audio))

    def test_decoded_samples_close_to_source(self, sample_mono_audio):
        payload = encode_wav(sample_mono_audio, 44100)
        decoded, _ = sf.read(io.BytesIO(payload), dtype='float32')
        # Positive samples lose up to one step to truncation and one to the 32767 scale
        assert np.max(np.abs(decoded - sample_mono_audio)) <= 2 / 32768

    @pytest.mark.parametrize("channels", [1, 2, 6])
    def test_block_align_tracks_channels(self, channels):
        payload = encode_wav(np.zeros((10, channels), dtype=np.float32), 22050)
        header = parse_header(payload)
        assert header['block_align'] == 2 * channels
        assert header['data_size'] == 20 * channels

    def test_round_trip_with_matching_decode(self, sample_stereo_audio):
        payload = encode_wav(sample_stereo_audio, 44100)
        pcm = np.frombuffer(payload[HEADER_SIZE:], dtype='<i2').reshape(-1, 2).astype(np.float64)
        decoded = np.where(pcm < 0, pcm / 32768.0, pcm / 32767.0)
        assert np.max(np.abs(decoded - sample_stereo_audio)) <= 1 / 32767
