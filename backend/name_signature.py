import os
import re
from enum import Enum
from typing import Optional, Tuple

# Solo dígitos ASCII: str.isdigit() acepta '²' y otros dígitos unicode
LEADING_DIGITS = re.compile(r'[0-9]+')


class InvariantViolation(RuntimeError):
    """Error de lógica interna, nunca una entrada inválida del usuario."""


class SignatureType(Enum):
    SEASON = 's'
    EPISODE = 'e'

    @property
    def marker(self) -> str:
        return self.value


class MatchSignature(Enum):
    MATCH = "match"
    NO_MATCH = "no_match"


class SignatureRange:
    """
    Posiciones de una firma dentro del nombre.

    `start` apunta a la letra marcadora ('s' o 'e') y `end` al último dígito,
    así que el texto literal es name[start:end + 1] (ej. "s01").
    """

    __slots__ = ("start", "end")

    def __init__(self, start: int, end: int):
        if start > end:
            raise InvariantViolation(f"Rango de firma inválido: start={start} > end={end}")
        self.start = start
        self.end = end

    def slice(self, name: str) -> str:
        return name[self.start:self.end + 1]

    def __eq__(self, other):
        if not isinstance(other, SignatureRange):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __hash__(self):
        return hash((self.start, self.end))

    def __repr__(self):
        return f"SignatureRange({self.start}, {self.end})"


def normalize_name(name) -> str:
    """Acepta str o rutas (os.PathLike) y devuelve el nombre en minúsculas."""
    return os.fspath(name).lower()


def locate_signature(signature_type: SignatureType, name: str) -> Optional[SignatureRange]:
    """
    Busca la primera aparición de la letra marcadora seguida inmediatamente de dígitos.

    `name` ya debe venir en minúsculas. Devuelve None si la letra no aparece o si
    nunca va seguida de dígitos (ej. "s 01" no cuenta, se sigue buscando).
    """
    chunks = name.split(signature_type.marker)

    # El primer trozo no tiene marcador delante
    offset = len(chunks[0]) + 1
    for chunk in chunks[1:]:
        digits = LEADING_DIGITS.match(chunk)
        if digits:
            start = offset - 1
            return SignatureRange(start, start + len(digits.group(0)))
        offset += len(chunk) + 1

    return None


def extract_signature(name) -> Optional[Tuple[str, str]]:
    """Devuelve los literales (temporada, episodio), ej. ("s04", "e01"), o None si falta alguno."""
    normalized = normalize_name(name)

    season = locate_signature(SignatureType.SEASON, normalized)
    if season is None:
        return None
    episode = locate_signature(SignatureType.EPISODE, normalized)
    if episode is None:
        return None

    return season.slice(normalized), episode.slice(normalized)


def match_signature(first_name, second_name) -> MatchSignature:
    """
    Compara las firmas SxxExx de dos nombres de archivo.

    La comparación es literal: "s1" no es igual a "s01". Un nombre sin temporada
    o sin episodio nunca coincide con nada.
    """
    first = extract_signature(first_name)
    if first is None:
        return MatchSignature.NO_MATCH
    second = extract_signature(second_name)
    if second is None:
        return MatchSignature.NO_MATCH

    if first == second:
        return MatchSignature.MATCH
    return MatchSignature.NO_MATCH


def names_match(first_name, second_name) -> bool:
    return match_signature(first_name, second_name) is MatchSignature.MATCH
