"""
Tests for WAV container load/save.
"""
import struct

import pytest
import numpy as np

from soundseg.core.wav import load_wav, save_wav
from soundseg.core.config import WAV_CONFIG


class TestSaveWav:
    """Tests for the written header and payload."""

    def test_header_fields(self, tmp_path):
        path = tmp_path / "out.wav"
        assert save_wav(path, [1, -2, 3])
        raw = path.read_bytes()

        assert len(raw) == WAV_CONFIG.header_size + 6
        assert raw[0:4] == b"RIFF"
        assert struct.unpack("<I", raw[4:8])[0] == 36 + 6
        assert raw[8:12] == b"WAVE"
        assert raw[12:16] == b"fmt "
        fmt = struct.unpack("<IHHIIHH", raw[16:36])
        assert fmt == (16, 1, 1, 8000, 16000, 2, 16)
        assert raw[36:40] == b"data"
        assert struct.unpack("<I", raw[40:44])[0] == 6

    def test_payload_little_endian(self, tmp_path):
        path = tmp_path / "out.wav"
        save_wav(path, np.array([1, -2, 32767], dtype=np.int16))
        payload = path.read_bytes()[WAV_CONFIG.header_size:]
        assert struct.unpack("<3h", payload) == (1, -2, 32767)

    def test_save_to_missing_directory_fails(self, tmp_path):
        path = tmp_path / "missing" / "out.wav"
        assert not save_wav(path, [1, 2, 3])
        assert not path.exists()


class TestLoadWav:
    """Tests for reading samples back."""

    def test_load_saved_samples(self, tmp_path, sample_tone):
        path = tmp_path / "tone.wav"
        assert save_wav(path, sample_tone)
        loaded = load_wav(path)
        assert loaded.dtype == np.int16
        assert np.array_equal(loaded, sample_tone)

    def test_load_into_buffer(self, tmp_path):
        path = tmp_path / "short.wav"
        save_wav(path, [4, 5, 6])
        buf = np.zeros(5, dtype=np.int16)
        result = load_wav(path, out=buf)
        assert result.tolist() == [4, 5, 6]
        assert buf.tolist() == [4, 5, 6, 0, 0]

    def test_load_into_small_buffer_truncates(self, tmp_path):
        path = tmp_path / "long.wav"
        save_wav(path, [4, 5, 6])
        buf = np.zeros(2, dtype=np.int16)
        assert load_wav(path, out=buf).tolist() == [4, 5]

    def test_load_missing_file_is_noop(self, tmp_path):
        buf = np.full(3, 7, dtype=np.int16)
        result = load_wav(tmp_path / "nope.wav", out=buf)
        assert len(result) == 0
        assert buf.tolist() == [7, 7, 7]

    def test_load_missing_file_returns_empty(self, tmp_path):
        assert len(load_wav(tmp_path / "nope.wav")) == 0

    def test_load_garbage_is_noop(self, tmp_path):
        path = tmp_path / "garbage.wav"
        path.write_bytes(b"not a wav file at all")
        assert len(load_wav(path)) == 0
