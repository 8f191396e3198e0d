import os
from pathlib import Path

import config as config_module
from name_signature import names_match


class SubtitleFileError(Exception):
    """Errores relacionados con un archivo de subtítulos."""

class InvalidSubtitleFileName(SubtitleFileError):
    pass

class MovieSubFileNamesMismatch(SubtitleFileError):
    """La firma SxxExx de la película y la del subtítulo no coinciden."""

class SubtitleFileSystemError(SubtitleFileError):
    """Falló el renombrado en disco (permisos, disco lleno, etc)."""


class MovieFileError(Exception):
    """Errores relacionados con un archivo de película."""

class InvalidMovieFileName(MovieFileError):
    pass


def has_extension(path, extensions: tuple) -> bool:
    return Path(path).suffix.lower() in extensions

def is_movie_file(path) -> bool:
    return has_extension(path, config_module.get_movie_extensions())

def is_subtitle_file(path) -> bool:
    return has_extension(path, config_module.get_subtitle_extensions())


class MovieFile:
    def __init__(self, path):
        path = Path(path)
        if not is_movie_file(path):
            raise InvalidMovieFileName(
                f"'{path.name}' no termina en una extensión de video ({', '.join(config_module.get_movie_extensions())})"
            )
        self.path = path
        self.matched = False

    def __str__(self):
        return str(self.path)

    def __repr__(self):
        return f"MovieFile({str(self.path)!r})"


class SubtitleFile:
    def __init__(self, path):
        path = Path(path)
        if not is_subtitle_file(path):
            raise InvalidSubtitleFileName(
                f"'{path.name}' no termina en una extensión de subtítulos ({', '.join(config_module.get_subtitle_extensions())})"
            )
        self.path = path
        self.renamed = False

    def __str__(self):
        return str(self.path)

    def __repr__(self):
        return f"SubtitleFile({str(self.path)!r})"

    def rename_using_movie_file(self, movie_file: MovieFile) -> Path:
        """
        Renombra el subtítulo con el nombre base de la película, conservando su extensión.

        Solo se comparan los nombres de archivo (no las carpetas), así que una ruta
        como /series/s01/... no interfiere con la firma.
        """
        if not names_match(movie_file.path.name, self.path.name):
            raise MovieSubFileNamesMismatch(
                f"Las firmas no coinciden: '{movie_file.path.name}' vs '{self.path.name}'"
            )

        new_path = movie_file.path.with_suffix(self.path.suffix)
        try:
            # os.rename pisa el destino en POSIX: nunca sobrescribir otro subtítulo
            if new_path.exists() and not os.path.samefile(self.path, new_path):
                raise FileExistsError(f"Ya existe '{new_path}'")
            os.rename(self.path, new_path)
        except OSError as e:
            raise SubtitleFileSystemError(f"Error renombrando '{self.path}' -> '{new_path}': {e}") from e

        self.path = new_path
        self.renamed = True
        movie_file.matched = True
        return new_path
