# usage: helpers for output naming and writing result tables
from pathlib import Path
import hashlib
import json
import re

import pandas as pd


def safe_filename(name: str, maxlen: int = 120) -> str:
    """
    Sanitize a string for use as an output filename fragment.

    Anything outside [A-Za-z0-9_.-] becomes "_", runs of "_" collapse, and the
    result is trimmed and truncated. Empty results become "untitled".
    """
    s = re.sub(r"[^\w\-.]+", "_", name)
    s = re.sub(r"_+", "_", s).strip(" ._")
    return s[:maxlen] if s else "untitled"


def output_tag(p: Path) -> str:
    """
    Stable output prefix for an input file: `<safe stem>_<6 hex of sha1(path)>`.

    Two inputs with the same stem in different folders never collide.
    """
    h = hashlib.sha1(str(p).encode("utf-8")).hexdigest()[:6]
    return f"{safe_filename(p.stem)}_{h}"


def write_table(df: pd.DataFrame, outdir: Path, tag: str, name: str) -> Path:
    """Write one result table as `<outdir>/<tag>_<name>.csv` and return its path."""
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{tag}_{name}.csv"
    df.to_csv(path, index=False, encoding="utf-8")
    return path


def write_json(data: dict, outdir: Path, tag: str, name: str) -> Path:
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{tag}_{name}.json"
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return path
