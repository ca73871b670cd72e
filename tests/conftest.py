import logging
import wave

import pytest
import structlog


class FakeHandle:
    """Stands in for TagHandle: records every set() and save()."""

    def __init__(self, **values):
        self.values = {
            "album": "", "artist": "", "comment": "", "genre": "", "title": "",
            "track": 0, "year": 0,
        }
        self.values.update(values)
        self.calls = []
        self.saves = 0

    def snapshot(self):
        return {**self.values, "length": "3:25"}

    def set(self, name, value):
        self.calls.append((name, value))
        self.values[name] = value

    def save(self, preserve_times=False):
        self.saves += 1


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep platformdirs, config lookups and logging inside tmp_path."""
    for var in ("XDG_CONFIG_HOME", "XDG_STATE_HOME", "XDG_DATA_HOME", "XDG_CACHE_HOME"):
        monkeypatch.setenv(var, str(tmp_path / "xdg" / var.lower()))
    for var in ("TAGEDIT_CONFIG", "TAGEDIT_WIDTH", "TAGEDIT_FORMAT", "TAGEDIT_SILENT",
                "TAGEDIT_PRESERVE", "TAGEDIT_EDITOR", "TAGEDIT_LOG_LEVEL", "VISUAL", "EDITOR"):
        monkeypatch.delenv(var, raising=False)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    yield
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def fake_handle():
    return FakeHandle(title="Old", artist="Someone", track=3, year=1999)


@pytest.fixture
def wav_file(tmp_path):
    """One second of 8 kHz mono silence, no tags."""
    path = tmp_path / "silence.wav"
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(8000)
        w.writeframes(b"\x00\x00" * 8000)
    return path


@pytest.fixture
def flac_file(tmp_path):
    """Header-only FLAC: STREAMINFO for one second at 44.1 kHz, no frames, no tags."""
    rate, samples = 44100, 44100
    packed = (rate << 44) | (1 << 41) | (15 << 36) | samples  # stereo, 16 bit
    streaminfo = (
        (4096).to_bytes(2, "big") * 2    # min/max block size
        + bytes(6)                       # min/max frame size unknown
        + packed.to_bytes(8, "big")
        + bytes(16)                      # MD5
    )
    path = tmp_path / "silence.flac"
    path.write_bytes(b"fLaC" + bytes([0x80]) + len(streaminfo).to_bytes(3, "big") + streaminfo)
    return path
