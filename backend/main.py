from typing import List, Optional
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import os
import uuid
from datetime import datetime
import config as config_module
from media_utils import SubtitleFileSystemError
from name_signature import SignatureType, extract_signature, locate_signature, names_match, normalize_name
from renamer import FileCountMismatch, rename_subtitles

app = FastAPI(title="SubAutoRename Backend")
job_logs: dict = {}      # Logs detallados por trabajo: {job_id: [str]}
MAX_JOB_LOGS = 500       # Max líneas de log por trabajo
MAX_JOBS = 100           # Max trabajos con logs guardados

def append_job_log(job_id: str, msg: str):
    """Agrega una línea de log a la cola del trabajo."""
    if job_id not in job_logs:
        job_logs[job_id] = []
        # Olvidar los trabajos más antiguos (los dict conservan el orden de inserción)
        while len(job_logs) > MAX_JOBS:
            job_logs.pop(next(iter(job_logs)))
    ts = datetime.now().strftime("%H:%M:%S")
    job_logs[job_id].append(f"[{ts}] {msg}")
    # Mantener log circular para no usar demasiada RAM
    if len(job_logs[job_id]) > MAX_JOB_LOGS:
        job_logs[job_id] = job_logs[job_id][-MAX_JOB_LOGS:]

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

class MatchRequest(BaseModel):
    first_name: str
    second_name: str

class LocateRequest(BaseModel):
    name: str
    signature_type: str = "season"

class RenameRequest(BaseModel):
    directory: str
    ignore_number_difference: Optional[bool] = None

class SettingsUpdate(BaseModel):
    movie_extensions: List[str]
    subtitle_extensions: List[str]
    ignore_number_difference: bool = False

def signature_as_dict(name: str):
    signature = extract_signature(name)
    if signature is None:
        return None
    season, episode = signature
    return {"season": season, "episode": episode}

@app.get("/api/status")
def get_status():
    """Devuelve el estado del servicio y las extensiones activas"""
    return {
        "status": "ok",
        "movie_extensions": list(config_module.get_movie_extensions()),
        "subtitle_extensions": list(config_module.get_subtitle_extensions()),
    }

@app.post("/api/match")
def match_names(req: MatchRequest):
    """Compara las firmas SxxExx de dos nombres de archivo"""
    return {
        "match": names_match(req.first_name, req.second_name),
        "first": signature_as_dict(req.first_name),
        "second": signature_as_dict(req.second_name),
    }

@app.post("/api/locate")
def locate(req: LocateRequest):
    """Devuelve la posición de la temporada o del episodio dentro del nombre"""
    try:
        signature_type = SignatureType[req.signature_type.strip().upper()]
    except KeyError:
        raise HTTPException(status_code=422, detail="signature_type debe ser 'season' o 'episode'")

    normalized = normalize_name(req.name)
    found = locate_signature(signature_type, normalized)
    if found is None:
        return {"found": False, "start": None, "end": None, "value": None}
    return {"found": True, "start": found.start, "end": found.end, "value": found.slice(normalized)}

@app.post("/api/rename")
def run_rename(req: RenameRequest):
    """Renombra los subtítulos de un directorio y devuelve el resumen"""
    job_id = uuid.uuid4().hex[:12]
    ignore = req.ignore_number_difference
    if ignore is None:
        ignore = config_module.get_ignore_number_difference()

    append_job_log(job_id, f"Iniciando renombrado en {req.directory}")
    if not os.path.isdir(req.directory):
        append_job_log(job_id, "[ERROR] Directorio no encontrado")
        raise HTTPException(status_code=404, detail="Directorio no encontrado")

    try:
        report = rename_subtitles(req.directory, ignore_number_difference=ignore, on_log=lambda msg: append_job_log(job_id, msg))
    except FileCountMismatch as e:
        append_job_log(job_id, f"[ERROR] {e}")
        raise HTTPException(status_code=409, detail=str(e))
    except (SubtitleFileSystemError, OSError) as e:
        append_job_log(job_id, f"[ERROR] {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "ok", "job_id": job_id, **report.to_dict()}

@app.get("/api/jobs/{job_id}/logs")
def get_job_logs(job_id: str, since: int = 0):
    """Devuelve logs detallados de un trabajo específico desde la línea `since`."""
    if job_id not in job_logs:
        raise HTTPException(status_code=404, detail="Trabajo no encontrado")
    logs = job_logs[job_id]
    return {"logs": logs[since:], "total": len(logs)}

@app.get("/api/settings")
def get_settings():
    return {
        "movie_extensions": list(config_module.get_movie_extensions()),
        "subtitle_extensions": list(config_module.get_subtitle_extensions()),
        "ignore_number_difference": config_module.get_ignore_number_difference(),
    }

@app.post("/api/settings")
def update_settings(req: SettingsUpdate):
    """Actualiza la configuración sin reiniciar el backend"""
    movie_exts = [config_module.normalize_extension(e) for e in req.movie_extensions if e.strip()]
    sub_exts = [config_module.normalize_extension(e) for e in req.subtitle_extensions if e.strip()]
    if not movie_exts or not sub_exts:
        raise HTTPException(status_code=400, detail="Se necesita al menos una extensión de video y una de subtítulos")
    if set(movie_exts) & set(sub_exts):
        raise HTTPException(status_code=400, detail="Una extensión no puede ser de video y de subtítulos a la vez")

    new_cfg = config_module.config.copy()
    new_cfg["media"] = {"movie_extensions": movie_exts, "subtitle_extensions": sub_exts}
    new_cfg["rename"] = {"ignore_number_difference": req.ignore_number_difference}

    try:
        config_module.save_config(new_cfg)
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Error guardando configuración: {e}")

    return {"status": "ok", "message": "Ajustes almacenados en vivo"}
