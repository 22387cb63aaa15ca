from __future__ import annotations
import json
import logging
import os
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from .storage import APP_HOME
logger = logging.getLogger(__name__)
DEFAULT_TELEMETRY_DIR = APP_HOME / "logs"
DEFAULT_TELEMETRY_FILE = "telemetry.jsonl"
def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
def _truncate(s: str, limit: int) -> str:
    if not s:
        return ""
    s = str(s)
    return s if len(s) <= limit else (s[:limit] + "\n...TRUNCATED...")
def _current_user() -> str:
    return os.environ.get("USERNAME") or os.environ.get("USER") or "unknown"
@dataclass
class TelemetryConfig:
    dir_path: Path = DEFAULT_TELEMETRY_DIR
    filename: str = DEFAULT_TELEMETRY_FILE
    max_payload_chars: int = 20_000
    split_by_user: bool = True
    fallback_dir: Path = field(default_factory=lambda: Path.home() / ".interaction_checker_telemetry")
    raise_on_error: bool = False
def _append_record(path: Path, record: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8", newline="\n") as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")
def log_event(
    event_type: str,
    *,
    app_version: str,
    action: str,
    model: str = "",
    duration_ms: Optional[int] = None,
    success: bool = True,
    error: str = "",
    payload: Optional[Dict[str, Any]] = None,
    config: Optional[TelemetryConfig] = None,
) -> Optional[Path]:
    """Append one JSON line describing an event; returns the file written, if any."""
    cfg = config or TelemetryConfig()
    dir_path = Path(os.environ.get("TELEMETRY_DIR", cfg.dir_path))
    base_filename = os.environ.get("TELEMETRY_FILE", cfg.filename)
    user = _current_user()
    filename = base_filename
    if cfg.split_by_user:
        stem = Path(base_filename).stem
        suffix = Path(base_filename).suffix or ".jsonl"
        filename = f"{stem}.{user}{suffix}"  # e.g. telemetry.jdoe.jsonl
    record: Dict[str, Any] = {
        "id": str(uuid.uuid4()),
        "ts_utc": _utc_now_iso(),
        "event_type": event_type,
        "action": action,
        "user": user,
        "app_version": app_version,
        "model": model,
        "duration_ms": duration_ms,
        "success": bool(success),
    }
    if error:
        record["error"] = _truncate(error, 2_000)
    if payload:
        record["payload"] = {
            k: _truncate(v, cfg.max_payload_chars) if isinstance(v, str) else v for k, v in payload.items()
        }
    out_path = dir_path / filename
    try:
        _append_record(out_path, record)
        return out_path
    except OSError as exc:
        logger.warning("Telemetry write to %s failed: %s", out_path, exc)
        fb_path = cfg.fallback_dir / filename
        record["telemetry_write_error"] = str(exc)
        try:
            _append_record(fb_path, record)
            return fb_path
        except OSError:
            if cfg.raise_on_error:
                raise
            return None
class Timer:
    def __init__(self) -> None:
        self._t0 = time.perf_counter()
    def ms(self) -> int:
        return int((time.perf_counter() - self._t0) * 1000)
def analysis_payload(checker: Any) -> Dict[str, Any]:
    result = checker.result
    return {
        "language": checker.inputs.language,
        "medications_count": len(checker.inputs.medications),
        "has_dob": bool(checker.inputs.date_of_birth),
        "high_risk_count": len(checker.high_risk_items()),
        "sources_count": len(result.sources) if result is not None else 0,
        "records_count": sum(len(records) for _, records in result.categories()) if result is not None else 0,
    }
def log_analysis(checker: Any, *, app_version: str, duration_ms: int, action: str = "analyze") -> Optional[Path]:
    """Record the outcome of ``InteractionChecker.analyze`` without any patient text."""
    return log_event(
        "analysis",
        app_version=app_version,
        action=action,
        model=getattr(checker.client, "model", "") or "",
        duration_ms=duration_ms,
        success=checker.result is not None,
        error=checker.error or "",
        payload=analysis_payload(checker),
    )
