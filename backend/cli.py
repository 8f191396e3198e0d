#!/usr/bin/env python
"""
Renombra los subtítulos de una carpeta de episodios con el nombre de su video.

  sub-auto-rename "/Media/Shows/Dark (2017)/Season 01"
  sub-auto-rename ./descargas --ignore-number-difference
"""

import argparse
import sys

import config as config_module
from media_utils import SubtitleFileSystemError
from renamer import FileCountMismatch, rename_subtitles


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sub-auto-rename",
        description="Renombra subtítulos .srt con el nombre del episodio cuya firma SxxExx coincide",
    )
    parser.add_argument(
        "episodes_subs_directory",
        help="Directorio con los episodios y sus subtítulos",
    )
    parser.add_argument(
        "-i", "--ignore-number-difference",
        action="store_true",
        default=None,
        help="No exigir que haya la misma cantidad de videos y subtítulos",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    ignore = args.ignore_number_difference
    if ignore is None:
        ignore = config_module.get_ignore_number_difference()

    try:
        report = rename_subtitles(args.episodes_subs_directory, ignore_number_difference=ignore)
    except FileCountMismatch as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Usa --ignore-number-difference para continuar de todas formas.", file=sys.stderr)
        return 1
    except (OSError, SubtitleFileSystemError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Renombrados: {len(report.renamed)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
