import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from media_utils import (
    InvalidMovieFileName,
    InvalidSubtitleFileName,
    MovieFile,
    MovieSubFileNamesMismatch,
    SubtitleFile,
)
from name_signature import extract_signature


class FileCountMismatch(Exception):
    def __init__(self, movies: int, subtitles: int):
        self.movies = movies
        self.subtitles = subtitles
        super().__init__(
            f"Total movie files are not the same as total subtitle files. Movies: {movies}, Subtitles: {subtitles}"
        )


@dataclass
class RenameReport:
    renamed: List[Tuple[Path, Path]] = field(default_factory=list)
    unmatched_movies: List[Path] = field(default_factory=list)
    unmatched_subtitles: List[Path] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "renamed": [{"from": str(old), "to": str(new)} for old, new in self.renamed],
            "unmatched_movies": [str(p) for p in self.unmatched_movies],
            "unmatched_subtitles": [str(p) for p in self.unmatched_subtitles],
        }


def log(msg: str, on_log: Optional[callable] = None):
    """Escribe en stdout y en la cola de logs del trabajo si está disponible."""
    print(msg, flush=True)
    if on_log:
        try:
            on_log(msg)
        except Exception:
            pass


def describe_signature(name: str) -> str:
    signature = extract_signature(name)
    if signature is None:
        return "sin firma"
    return "".join(signature).upper()


def collect_media_files(directory, on_log: Optional[callable] = None) -> Tuple[List[MovieFile], List[SubtitleFile]]:
    """Clasifica los archivos del directorio (sin recursión) en películas y subtítulos."""
    movies = []
    subtitles = []

    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        try:
            if not entry.is_file():
                continue
        except OSError as e:
            log(f"[Renamer] No se pudo leer {entry.name}: {e}", on_log)
            continue

        try:
            movies.append(MovieFile(entry.path))
            continue
        except InvalidMovieFileName:
            pass

        try:
            subtitles.append(SubtitleFile(entry.path))
        except InvalidSubtitleFileName:
            pass

    return movies, subtitles


def rename_subtitles(directory, ignore_number_difference: bool = False, on_log: Optional[callable] = None) -> RenameReport:
    """
    Renombra cada subtítulo del directorio con el nombre de la película cuya firma SxxExx coincide.

    Lanza FileCountMismatch si el número de películas y subtítulos difiere (salvo
    ignore_number_difference) y deja propagar SubtitleFileSystemError, abortando el resto.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"El directorio no existe: {directory}")

    movies, subtitles = collect_media_files(directory, on_log)
    log(f"[Renamer] {directory}: {len(movies)} películas, {len(subtitles)} subtítulos", on_log)

    if not ignore_number_difference and len(movies) != len(subtitles):
        raise FileCountMismatch(len(movies), len(subtitles))

    report = RenameReport()

    for movie in movies:
        if movie.matched:
            continue
        for subtitle in subtitles:
            if subtitle.renamed:
                continue
            old_path = subtitle.path
            try:
                new_path = subtitle.rename_using_movie_file(movie)
            except MovieSubFileNamesMismatch:
                continue
            log(f"[Renamer] Renamed subtitle file {old_path.name} -> {new_path.name}", on_log)
            report.renamed.append((old_path, new_path))
            break
        else:
            log(f"[Renamer] ⚠️ Sin subtítulo para {movie.path.name} ({describe_signature(movie.path.name)})", on_log)

    report.unmatched_movies = [m.path for m in movies if not m.matched]
    report.unmatched_subtitles = [s.path for s in subtitles if not s.renamed]

    log(f"[Renamer] ✓ {len(report.renamed)} renombrados, {len(report.unmatched_movies)} películas sin subtítulo, {len(report.unmatched_subtitles)} subtítulos sin película", on_log)
    return report
