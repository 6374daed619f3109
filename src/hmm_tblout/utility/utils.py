# ── src/hmm_tblout/utility/utils.py ────────────────────────────────
from __future__ import annotations

import logging
import logging.handlers
import sys
import yaml
from pathlib import Path

# ── locate repo root & default paths  ──────────────────────────────────
def _find_repo_root(start: Path | None = None) -> Path:
    """Walk parents until we see pyproject.toml or .git."""
    here = start or Path(__file__).resolve()
    for p in [here, *here.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return Path(__file__).resolve().parents[1]       # site-packages wheel

ROOT      = _find_repo_root()
LOG_ROOT  = ROOT / "logs"
CONF_PATH = ROOT / "config" / "config.yaml"

LOG_FORMAT = "%(asctime)s  %(levelname)-7s  %(name)s:  %(message)s"

# ── config  ────────────────────────────────────────────────────────────
def load_config(path: str | Path | None = None, *, missing_ok: bool = False) -> dict:
    """
    Read config.yaml (CONF_PATH unless path is given).

    With missing_ok an absent file reads as {} so an installed wheel without
    the repo's config/ still gets the built-in defaults.
    """
    p = Path(path) if path is not None else CONF_PATH
    if missing_ok and not p.exists():
        return {}
    with p.open() as fh:
        return yaml.safe_load(fh) or {}

def section(name: str, cfg: dict | None = None) -> dict:
    """One section of the config; the repo config is read when cfg is None."""
    cfg = load_config(missing_ok=True) if cfg is None else cfg
    return dict(cfg.get(name) or {})

# ── logging  ───────────────────────────────────────────────────────────
def set_module_level(module_name: str, level: int) -> None:
    logging.getLogger(module_name).setLevel(level)

def setup_logging(
    log_dir: str | Path | None = None,
    *,
    level: int | str | None = None,
    console: bool = True,
    force: bool = False,
    max_bytes: int | None = None,
    backup_count: int = 0,
    log_file_prefix: str = "hmm_tblout",
) -> Path:
    """
    Send the root logger to '<log_dir>/<log_file_prefix>.log' (and stderr if console).

    max_bytes switches to a RotatingFileHandler keeping backup_count old files.
    Already configured root loggers are left alone unless force is set.
    """
    root_dir = Path(log_dir if log_dir is not None else LOG_ROOT).expanduser()
    root_dir.mkdir(parents=True, exist_ok=True)
    logfile = root_dir / f"{log_file_prefix}.log"

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        return logfile

    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)
        h.close()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root_logger.setLevel(level or logging.INFO)

    if max_bytes:
        fh = logging.handlers.RotatingFileHandler(
            logfile, maxBytes=max_bytes, backupCount=backup_count,
            encoding="utf-8", delay=True
        )
    else:
        fh = logging.FileHandler(logfile, mode="a", encoding="utf-8", delay=True)

    fmt = logging.Formatter(LOG_FORMAT)
    fh.setFormatter(fmt)
    root_logger.addHandler(fh)

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(fmt)
        root_logger.addHandler(ch)

    root_logger.info("Logging to %s", logfile)
    return logfile

def setup_logging_from_config(cfg: dict | None = None, **overrides) -> Path:
    """setup_logging() with defaults from the 'logging' section of config.yaml."""
    opts = section("logging", cfg)
    opts.update(overrides)
    return setup_logging(**opts)
