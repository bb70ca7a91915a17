from pathlib import Path

from mediadiff.services.probe_service import display_name, probe_file


def test_probe_audio_file(tmp_path, fake_probe, mp3_probe):
    fake_probe["song.mp3"] = mp3_probe
    path = tmp_path / "song.mp3"
    path.write_bytes(b"x")

    summary = probe_file(path, root=tmp_path, ffprobe_cmd="ffprobe", relative_paths=True)

    assert summary.file_name == "song.mp3"
    assert summary.duration == "01:31"
    assert summary.bit_rate == "12.00 KB/s"
    assert summary.streams == ("Audio: 0/0 kb/s",)
    assert summary.sort_key == str(path)


def test_probe_video_file_lists_video_before_audio(tmp_path, fake_probe, mkv_probe):
    fake_probe["film.mkv"] = mkv_probe
    (tmp_path / "movies").mkdir()
    path = tmp_path / "movies" / "film.mkv"
    path.write_bytes(b"x")

    summary = probe_file(path, root=tmp_path, ffprobe_cmd="ffprobe", relative_paths=True)

    assert summary.to_block() == (
        "movies/film.mkv\n"
        "\tDuration: 01:30:00.25\n"
        "\tBit rate: 8.50 MB/s\n"
        "\tVideo: 24000/1001 kb/s\n"
        "\tAudio: 0/0 kb/s"
    )


def test_unparsable_file_is_ignored_with_warning(tmp_path, fake_probe, log_records):
    path = tmp_path / "notes.txt"
    path.write_text("not media", encoding="utf-8")

    assert probe_file(path, ffprobe_cmd="ffprobe") is None
    assert ("WARNING", f"Error processing file, ignoring: {path}") in log_records


def test_image_is_ignored_when_strict(tmp_path, fake_probe, image_probe, log_records):
    fake_probe["cover.png"] = image_probe
    path = tmp_path / "cover.png"
    path.write_bytes(b"x")

    assert probe_file(path, ffprobe_cmd="ffprobe", strict_mime=True) is None
    assert any(level == "WARNING" and "image/png" in msg for level, msg in log_records)


def test_image_is_reported_when_lenient(tmp_path, fake_probe, image_probe, log_records):
    fake_probe["cover.png"] = image_probe
    path = tmp_path / "cover.png"
    path.write_bytes(b"x")

    summary = probe_file(path, root=tmp_path, ffprobe_cmd="ffprobe", strict_mime=False)

    assert summary is not None
    assert summary.bit_rate == "800 B/s"
    assert summary.streams == ("Video: 25/1 kb/s",)
    assert any(level == "WARNING" and "reporting anyway" in msg for level, msg in log_records)


def test_stream_metadata_only_goes_to_debug_log(tmp_path, fake_probe, mkv_probe, log_records):
    fake_probe["film.mkv"] = mkv_probe
    path = tmp_path / "film.mkv"
    path.write_bytes(b"x")

    summary = probe_file(path, ffprobe_cmd="ffprobe")

    debug_messages = [msg for level, msg in log_records if level == "DEBUG"]
    assert "title: Commentary" in debug_messages
    assert "Stream Index: 2 (audio)" in debug_messages
    assert "Commentary" not in summary.to_block()


def test_missing_file_is_ignored(tmp_path, fake_probe):
    assert probe_file(tmp_path / "gone.mkv", ffprobe_cmd="ffprobe") is None


def test_display_name():
    root = Path("/library")
    path = Path("/library/tv/show/e01.mkv")
    assert display_name(path, root, relative_paths=True) == "tv/show/e01.mkv"
    assert display_name(path, root, relative_paths=False) == str(path)
    assert display_name(path, None, relative_paths=True) == str(path)
    assert display_name(Path("/elsewhere/e01.mkv"), root, relative_paths=True) == str(
        Path("/elsewhere/e01.mkv")
    )


def test_file_name_starting_with_dash_is_passed_as_absolute_path(tmp_path, fake_probe, mp3_probe, monkeypatch):
    monkeypatch.chdir(tmp_path)
    fake_probe["-intro.mp3"] = mp3_probe
    (tmp_path / "-intro.mp3").write_bytes(b"x")

    summary = probe_file(Path("-intro.mp3"), root=Path("."), ffprobe_cmd="ffprobe", relative_paths=True)

    assert summary.file_name == "-intro.mp3"
    [filename] = fake_probe.filenames
    assert Path(filename).is_absolute()
    assert Path(filename).resolve() == (tmp_path / "-intro.mp3").resolve()
