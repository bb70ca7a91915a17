import copy
from pathlib import Path

import ffmpeg
import pytest
from loguru import logger


MP3_PROBE = {
    "format": {"format_name": "mp3", "duration": "91.000000", "bit_rate": "12000"},
    "streams": [
        {
            "index": 0,
            "codec_type": "audio",
            "codec_name": "mp3",
            "channels": 2,
            "sample_rate": "44100",
            "bit_rate": "12000",
            "r_frame_rate": "0/0",
            "disposition": {"default": 0},
        }
    ],
}

MKV_PROBE = {
    "format": {
        "format_name": "matroska,webm",
        "duration": "5400.250000",
        "bit_rate": "8500000",
    },
    "streams": [
        {
            "index": 0,
            "codec_type": "video",
            "codec_name": "hevc",
            "width": 1920,
            "height": 1080,
            "r_frame_rate": "24000/1001",
            "avg_frame_rate": "24000/1001",
            "disposition": {"default": 1},
            "tags": {"BPS": "8000000", "title": "Main"},
        },
        {
            "index": 1,
            "codec_type": "audio",
            "codec_name": "ac3",
            "channels": 6,
            "sample_rate": "48000",
            "bit_rate": "640000",
            "r_frame_rate": "0/0",
            "disposition": {"default": 1},
            "tags": {"language": "eng"},
        },
        {
            "index": 2,
            "codec_type": "audio",
            "codec_name": "aac",
            "channels": 2,
            "sample_rate": "48000",
            "bit_rate": "192000",
            "r_frame_rate": "0/0",
            "disposition": {"default": 0},
            "tags": {"language": "eng", "title": "Commentary"},
        },
    ],
}

IMAGE_PROBE = {
    "format": {"format_name": "png_pipe", "bit_rate": "800"},
    "streams": [
        {
            "index": 0,
            "codec_type": "video",
            "codec_name": "png",
            "width": 640,
            "height": 480,
            "r_frame_rate": "25/1",
        }
    ],
}


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


@pytest.fixture
def log_records():
    """Captures loguru output as (level name, message) tuples."""
    records = []
    handler_id = logger.add(
        lambda message: records.append(
            (message.record["level"].name, message.record["message"])
        ),
        level="TRACE",
        format="{message}",
    )
    yield records
    logger.remove(handler_id)


class FakeProbe:
    """
    Stands in for `ffmpeg.probe`, answering by file name.

    Register canned ffprobe output with `fake_probe["name.ext"] = {...}`, or an
    exception instance to raise. Unknown names fail the way ffprobe fails on a
    file it cannot parse.
    """

    def __init__(self):
        self.responses = {}
        self.calls = []
        self.filenames = []

    def __setitem__(self, name, response):
        self.responses[name] = response

    def __call__(self, filename, cmd="ffprobe", **kwargs):
        name = Path(filename).name
        self.calls.append(name)
        self.filenames.append(filename)
        response = self.responses.get(name)
        if response is None:
            raise ffmpeg.Error(
                cmd, b"", f"{filename}: Invalid data found when processing input".encode()
            )
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_probe(monkeypatch):
    probe = FakeProbe()
    monkeypatch.setattr(ffmpeg, "probe", probe)
    return probe


@pytest.fixture
def mp3_probe():
    return copy.deepcopy(MP3_PROBE)


@pytest.fixture
def mkv_probe():
    return copy.deepcopy(MKV_PROBE)


@pytest.fixture
def image_probe():
    return copy.deepcopy(IMAGE_PROBE)
