"""Readers for the CLI's job description, profile and post files."""

import json
import re
from pathlib import Path

import yaml


def parse_jd(text: str) -> str:
    """Clean and normalize job description text."""
    # Remove excessive whitespace
    text = re.sub(r'\n{3,}', '\n\n', text)
    text = re.sub(r'[ \t]+', ' ', text)
    lines = [line.strip() for line in text.splitlines()]
    return '\n'.join(lines).strip()


def load_jd_file(file_path: str) -> str:
    """Load JD from a text file."""
    return parse_jd(Path(file_path).read_text(encoding="utf-8"))


def load_data_file(file_path: str):
    """Load a YAML or JSON document, chosen by file suffix."""
    text = Path(file_path).read_text(encoding="utf-8")
    if Path(file_path).suffix.lower() == ".json":
        return json.loads(text)
    data = yaml.safe_load(text)
    return data if data is not None else {}


def load_list_file(file_path: str, key: str) -> list:
    """Load a list either at the top level or under ``key``."""
    data = load_data_file(file_path)
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"{file_path}: expected a list of {key}")
    return data
