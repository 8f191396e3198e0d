import os

import pytest

from media_utils import SubtitleFileSystemError
from renamer import FileCountMismatch, collect_media_files, rename_subtitles


def make_files(directory, names):
    for name in names:
        (directory / name).write_text("")


def test_collect_media_files(tmp_path):
    make_files(tmp_path, ["b.S01E02.mkv", "a.S01E01.mp4", "a.S01E01.srt", "notes.txt", "poster.jpg"])
    (tmp_path / "extras.mkv").mkdir()

    movies, subtitles = collect_media_files(tmp_path)

    assert [m.path.name for m in movies] == ["a.S01E01.mp4", "b.S01E02.mkv"]
    assert [s.path.name for s in subtitles] == ["a.S01E01.srt"]


def test_rename_whole_season(tmp_path):
    make_files(tmp_path, [
        "Dark.S01E01.Secrets.1080p.mkv",
        "Dark.S01E02.Lies.1080p.mkv",
        "Dark.S01E03.Past.and.Present.1080p.mkv",
        "dark_s01e03_es.srt",
        "dark_s01e01_es.srt",
        "dark_s01e02_es.srt",
    ])
    lines = []

    report = rename_subtitles(tmp_path, on_log=lines.append)

    assert len(report.renamed) == 3
    assert report.unmatched_movies == []
    assert report.unmatched_subtitles == []
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "Dark.S01E01.Secrets.1080p.mkv",
        "Dark.S01E01.Secrets.1080p.srt",
        "Dark.S01E02.Lies.1080p.mkv",
        "Dark.S01E02.Lies.1080p.srt",
        "Dark.S01E03.Past.and.Present.1080p.mkv",
        "Dark.S01E03.Past.and.Present.1080p.srt",
    ]
    assert any("Renamed subtitle file dark_s01e01_es.srt" in line for line in lines)


def test_count_mismatch(tmp_path):
    make_files(tmp_path, ["Show.S01E01.mkv", "Show.S01E02.mkv", "Show.S01E01.srt.srt"])

    with pytest.raises(FileCountMismatch) as exc:
        rename_subtitles(tmp_path)

    assert exc.value.movies == 2
    assert exc.value.subtitles == 1
    assert "Movies: 2, Subtitles: 1" in str(exc.value)
    # No se toca nada
    assert (tmp_path / "Show.S01E01.srt.srt").exists()


def test_ignore_number_difference(tmp_path):
    make_files(tmp_path, ["Show.S01E01.mkv", "Show.S01E02.mkv", "show s01e02.srt"])

    report = rename_subtitles(tmp_path, ignore_number_difference=True)

    assert [(old.name, new.name) for old, new in report.renamed] == [("show s01e02.srt", "Show.S01E02.srt")]
    assert [p.name for p in report.unmatched_movies] == ["Show.S01E01.mkv"]
    assert report.unmatched_subtitles == []


def test_unmatched_subtitle_is_left_alone(tmp_path):
    make_files(tmp_path, ["Show.S01E01.mkv", "Show.S1E1.srt"])

    report = rename_subtitles(tmp_path)

    assert report.renamed == []
    assert [p.name for p in report.unmatched_subtitles] == ["Show.S1E1.srt"]
    assert (tmp_path / "Show.S1E1.srt").exists()


def test_report_to_dict(tmp_path):
    make_files(tmp_path, ["Show.S02E05.mkv", "x.s02e05.srt"])

    data = rename_subtitles(tmp_path).to_dict()

    assert data["renamed"] == [{"from": str(tmp_path / "x.s02e05.srt"), "to": str(tmp_path / "Show.S02E05.srt")}]
    assert data["unmatched_movies"] == []


def test_missing_directory(tmp_path):
    with pytest.raises(NotADirectoryError):
        rename_subtitles(tmp_path / "nope")


def test_two_movies_same_base_name_keep_both_subtitles(tmp_path):
    make_files(tmp_path, ["ep.S01E01.mkv", "ep.S01E01.mp4"])
    (tmp_path / "en.S01E01.srt").write_text("ENGLISH")
    (tmp_path / "es.S01E01.srt").write_text("ESPANOL")

    with pytest.raises(SubtitleFileSystemError):
        rename_subtitles(tmp_path)

    contents = sorted(p.read_text() for p in tmp_path.glob("*.srt"))
    assert contents == ["ENGLISH", "ESPANOL"]


def test_scan_error_propagates(tmp_path, monkeypatch):
    def denied(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(os, "scandir", denied)

    with pytest.raises(PermissionError):
        rename_subtitles(tmp_path)
